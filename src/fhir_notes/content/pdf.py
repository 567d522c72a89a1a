"""Minimal single-page PDF 1.4 consultation note.

The page uses the built-in Courier font so no font embedding is needed. Object
offsets in the xref table are computed from the assembled bytes, so strict
readers accept the file without repairing it.
"""

from __future__ import annotations

from .base import GeneratedContent

FILENAME = "consultation-note.pdf"

CONSULTATION_LINES: list[tuple[int, str]] = [
    # (vertical offset from previous line, text)
    (0,   "CONSULTATION NOTE"),
    (-20, "Date: January 15, 2025"),
    (-30, "CHIEF COMPLAINT:"),
    (-15, "Patient presents with persistent headaches over the past 2 weeks."),
    (-25, "HISTORY OF PRESENT ILLNESS:"),
    (-15, "The patient reports bilateral frontal headaches, worse in the morning."),
    (-15, "No associated nausea, vomiting, or visual changes. Patient has tried"),
    (-15, "over-the-counter analgesics with minimal relief."),
    (-25, "REVIEW OF SYSTEMS:"),
    (-15, "Constitutional: No fever, chills, or weight loss"),
    (-15, "Neurological: Headaches as above, no focal deficits"),
    (-25, "PHYSICAL EXAMINATION:"),
    (-15, "Vital Signs: BP 128/78, HR 72, RR 16, Temp 98.6F"),
    (-15, "General: Alert and oriented, no acute distress"),
    (-15, "HEENT: Normocephalic, atraumatic, PERRLA, EOMI"),
    (-15, "Neurological: CN II-XII intact, no focal deficits"),
    (-25, "ASSESSMENT AND PLAN:"),
    (-15, "1. Tension-type headache"),
    (-15, "   - Trial of prophylactic therapy"),
    (-15, "   - Stress reduction techniques"),
    (-15, "   - Follow-up in 2 weeks"),
    (-20, "2. Rule out secondary causes"),
    (-15, "   - Order brain MRI if symptoms persist"),
    (-15, "   - Monitor blood pressure"),
]


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _content_stream(lines: list[tuple[int, str]]) -> bytes:
    ops = ["BT", "/F1 12 Tf", "72 720 Td"]
    for dy, text in lines:
        if dy:
            ops.append(f"0 {dy} Td")
        ops.append(f"({_escape(text)}) Tj")
    ops.append("ET")
    return ("\n".join(ops) + "\n").encode("latin-1")


def build_pdf(lines: list[tuple[int, str]]) -> bytes:
    """Assemble a one-page PDF with a correct xref table."""
    stream = _content_stream(lines)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /Resources 4 0 R /MediaBox [0 0 612 792] /Contents 5 0 R >>",
        b"<< /Font << /F1 << /Type /Font /Subtype /Type1 /BaseFont /Courier >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"endstream",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n".encode()
    out += f"startxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


def generate() -> GeneratedContent:
    return GeneratedContent(data=build_pdf(CONSULTATION_LINES), filename=FILENAME)
