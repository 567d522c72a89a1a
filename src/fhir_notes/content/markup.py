"""Rich-text notes: an HTML progress note and an XHTML discharge summary."""

from __future__ import annotations

from .base import GeneratedContent

HTML_FILENAME = "progress-note.html"
XHTML_FILENAME = "discharge-summary.xhtml"

_STYLE = """
        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            line-height: 1.6;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            color: #333;
        }
        h1 {
            color: #2c3e50;
            border-bottom: 3px solid #3498db;
            padding-bottom: 10px;
        }
        h2 {
            color: #34495e;
            margin-top: 25px;
            border-left: 4px solid #3498db;
            padding-left: 10px;
        }
        .metadata {
            background-color: #f8f9fa;
            padding: 15px;
            border-radius: 5px;
            margin-bottom: 20px;
        }
        .metadata p { margin: 5px 0; }
        .vitals {
            background-color: #e7f3ff;
            padding: 10px;
            border-radius: 5px;
            margin: 10px 0;
        }
        .assessment {
            background-color: #f0f8f0;
            padding: 15px;
            border-left: 4px solid #28a745;
            margin: 15px 0;
        }
        .plan {
            background-color: #fff8e6;
            padding: 15px;
            border-left: 4px solid #ffc107;
            margin: 15px 0;
        }
        .highlight {
            background-color: #fff3cd;
            padding: 2px 4px;
            border-radius: 3px;
        }
"""

HTML_PROGRESS_NOTE = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Progress Note</title>
    <style>{_STYLE}    </style>
</head>
<body>
    <h1>Progress Note</h1>

    <div class="metadata">
        <p><strong>Date:</strong> {{{{CURRENT_DATE}}}}</p>
        <p><strong>Time:</strong> {{{{CURRENT_TIME}}}}</p>
        <p><strong>Patient:</strong> {{{{PATIENT_NAME}}}}</p>
        <p><strong>Provider:</strong> {{{{AUTHOR_NAME}}}}</p>
        <p><strong>Location:</strong> Cardiology Ward, Room 312</p>
    </div>

    <h2>Subjective</h2>
    <p>
        Patient reports <em>feeling much better today</em>. Chest pain has completely resolved
        since yesterday evening. Patient slept well overnight without any shortness of breath.
        No complaints at this time.
    </p>
    <p>
        Patient states: <span class="highlight">"I feel like I'm ready to go home."</span>
    </p>

    <h2>Objective</h2>

    <div class="vitals">
        <strong>Vital Signs:</strong>
        <ul>
            <li>Blood Pressure: 128/76 mmHg</li>
            <li>Heart Rate: 68 bpm (regular rhythm)</li>
            <li>Respiratory Rate: 16 breaths/min</li>
            <li>Temperature: 98.4°F (36.9°C)</li>
            <li>O₂ Saturation: 98% on room air</li>
        </ul>
    </div>

    <p><strong>Physical Examination:</strong></p>
    <ul>
        <li><strong>General:</strong> Alert, oriented × 3, appears comfortable, no acute distress</li>
        <li><strong>Cardiovascular:</strong> Regular rate and rhythm, S1 and S2 normal, no murmurs</li>
        <li><strong>Respiratory:</strong> Clear to auscultation bilaterally, no wheezes, rales, or rhonchi</li>
        <li><strong>Extremities:</strong> No edema, pulses 2+ bilaterally</li>
    </ul>

    <p><strong>Laboratory Results:</strong></p>
    <ul>
        <li>Troponin: &lt;0.01 ng/mL (normal)</li>
        <li>BNP: 95 pg/mL (normal)</li>
        <li>Complete Blood Count: Within normal limits</li>
        <li>Basic Metabolic Panel: Within normal limits</li>
    </ul>

    <h2>Assessment</h2>

    <div class="assessment">
        <ol>
            <li><strong>Chest pain, resolved</strong>
                <ul>
                    <li>Likely musculoskeletal in origin</li>
                    <li>Cardiac workup negative (EKG, troponins)</li>
                </ul>
            </li>
            <li><strong>Hypertension, stable</strong></li>
            <li><strong>Type 2 Diabetes Mellitus, stable</strong></li>
        </ol>
    </div>

    <h2>Plan</h2>

    <div class="plan">
        <ol>
            <li><strong>Discharge planning:</strong> patient medically stable for discharge this afternoon</li>
            <li><strong>Medications:</strong> continue home medications; ibuprofen 400mg PRN</li>
            <li><strong>Follow-up:</strong> primary care within 1 week; return to ED if chest pain recurs</li>
            <li><strong>Patient education:</strong> warning signs of cardiac events, medication compliance</li>
        </ol>
    </div>

    <hr>

    <p>
        <strong>Electronically signed by:</strong> {{{{AUTHOR_NAME}}}}<br>
        <strong>Date/Time:</strong> {{{{CURRENT_TIMESTAMP}}}}<br>
        <strong>Department:</strong> Internal Medicine
    </p>
</body>
</html>
"""

XHTML_DISCHARGE_SUMMARY = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" "http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">
<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="en">
<head>
  <meta http-equiv="Content-Type" content="application/xhtml+xml; charset=UTF-8"/>
  <title>Discharge Summary</title>
</head>
<body>
  <h1>Discharge Summary</h1>

  <table>
    <tr><th>Patient</th><td>{{PATIENT_NAME}} ({{PATIENT_ID}})</td></tr>
    <tr><th>Attending</th><td>{{AUTHOR_NAME}}</td></tr>
    <tr><th>Discharge date</th><td>{{CURRENT_DATE}} {{CURRENT_TIME}}</td></tr>
    <tr><th>Prepared by</th><td>{{APP_NAME}}</td></tr>
  </table>

  <h2>Discharge Diagnoses</h2>
  <ol>
    <li>Acute exacerbation of COPD, resolved</li>
    <li>Type 2 Diabetes Mellitus, stable</li>
    <li>Hypertension, controlled</li>
  </ol>

  <h2>Hospital Course</h2>
  <p>The patient was admitted through the emergency department with shortness of breath and
  increased sputum production. Chest X-ray showed hyperinflation without acute infiltrate.
  Treatment included supplemental oxygen, bronchodilators, and a steroid taper.</p>
  <p>By hospital day 3 oxygen requirement had resolved and saturation remained above 92% on
  room air during ambulation.</p>

  <h2>Discharge Medications</h2>
  <table>
    <tr><th>Medication</th><th>Dose</th><th>Frequency</th></tr>
    <tr><td>Albuterol Inhaler</td><td>90 mcg</td><td>2 puffs every 4-6 hours as needed</td></tr>
    <tr><td>Tiotropium</td><td>18 mcg</td><td>Once daily</td></tr>
    <tr><td>Prednisone</td><td>40 mg</td><td>Once daily, taper over 5 days</td></tr>
  </table>

  <h2>Follow-up</h2>
  <ul>
    <li>Primary care physician within 1 week</li>
    <li>Pulmonology within 2 weeks</li>
    <li>Return to the emergency department for worsening shortness of breath or fever above 101&#176;F</li>
  </ul>

  <p>Electronically signed by {{AUTHOR_GIVEN_NAME}} {{AUTHOR_FAMILY_NAME}} {{AUTHOR_TITLE}} at {{CURRENT_TIMESTAMP}}</p>
</body>
</html>
"""


def generate_html() -> GeneratedContent:
    return GeneratedContent(data=HTML_PROGRESS_NOTE.encode("utf-8"), filename=HTML_FILENAME)


def generate_xhtml() -> GeneratedContent:
    return GeneratedContent(data=XHTML_DISCHARGE_SUMMARY.encode("utf-8"), filename=XHTML_FILENAME)
