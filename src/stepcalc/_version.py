"""Single source of truth for the stepcalc version."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

__version__ = "0.3.0"


def get_version() -> str:
    """Get version from installed metadata, falling back to __version__."""
    try:
        return _metadata_version("stepcalc")
    except PackageNotFoundError:
        return __version__
