"""climbsense – move detection for climbing accelerometer recordings."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__: str = version("climbsense")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
