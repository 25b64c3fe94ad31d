"""Package version, read from the installed distribution metadata."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("arena-lru-cache")
except PackageNotFoundError:
    # Source checkout without an install
    __version__ = "0.0.0-dev"
