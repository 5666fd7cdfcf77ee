"""Top-level package for the Poll Toolkit.

Provides subpackages:
- poll_toolkit.core – question, document and library models
- poll_toolkit.extractor – question extraction and categorization
- poll_toolkit.storage – blob store and snapshot persistence
- poll_toolkit.admin – document upload/processing workflow
- poll_toolkit.builder – questionnaire templates and export
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("poll-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
