# The docker build writes the release version and git commit to _version.py.
# Running from a checkout, both are None.
try:
    from nypl.hold_eligibility._version import __commit__, __version__
except ImportError:
    __version__: str | None = None  # type: ignore[no-redef]
    __commit__: str | None = None  # type: ignore[no-redef]

__all__ = ["__version__", "__commit__"]
