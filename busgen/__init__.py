"""busgen - Rust zbus proxy generator for D-Bus interfaces."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("busgen")
except PackageNotFoundError:
    __version__ = "(local)"
