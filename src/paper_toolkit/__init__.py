"""Top-level package for the exam paper composition toolkit.

Provides subpackages:
- paper_toolkit.core – immutable models, schemas, serialization, bilingual text
- paper_toolkit.common – subject catalogue, chapter coverage, thresholds
- paper_toolkit.composer – selection, layout budgets, marks and paper composition
- paper_toolkit.cli – command line front end
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text(encoding="utf-8")
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("paper-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
