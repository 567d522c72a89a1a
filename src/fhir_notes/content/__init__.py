from collections.abc import Callable

from ..errors import ContentSourceError
from . import cda, large, markup, pdf
from .base import GeneratedContent

GENERATORS: dict[str, Callable[[], GeneratedContent]] = {
    "pdf": pdf.generate,
    "cda": cda.generate,
    "xhtml": markup.generate_xhtml,
    "html": markup.generate_html,
    "large": large.generate,
}


def run_generator(name: str) -> GeneratedContent:
    """Run a registered generator by name."""
    try:
        generator = GENERATORS[name]
    except KeyError:
        raise ContentSourceError(
            f"Unknown generator: {name}. Available: {', '.join(GENERATORS)}"
        ) from None
    return generator()


__all__ = ["GENERATORS", "GeneratedContent", "run_generator"]
