"""
Endpoint Documentation Merger

Computes the effective documentation of web endpoints by merging the
routing metadata declared on a controller class with the metadata declared
on each of its handler methods.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("endpoint-doc-merger")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "__version__",
]
