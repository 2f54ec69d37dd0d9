"""specledger: markdown spec documents with git-derived lifecycle metadata."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("specledger")
except PackageNotFoundError:
    __version__ = "0.1.0"
