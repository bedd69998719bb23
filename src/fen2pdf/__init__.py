"""Top-level package for fen2pdf.

Turns a Lichess study into a printable PDF of board diagrams,
nine boards per A4 page.

Provides subpackages:
- fen2pdf.core – position and study models, FEN helpers
- fen2pdf.loading – study download and PGN study parsing
- fen2pdf.images – piece glyph providers
- fen2pdf.layout – board rendering and page composition
- fen2pdf.output – PDF emission
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("fen2pdf")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()

from .config import BuilderConfig
from .controller import BuildError, BuildResult, build_study, build_study_from_text

__all__: list[str] = [
    "__version__",
    "BuilderConfig",
    "BuildError",
    "BuildResult",
    "build_study",
    "build_study_from_text",
]
