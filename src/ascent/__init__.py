"""Ascent - single-screen reflex climbing game with a procedural IK climber."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ascent")
except PackageNotFoundError:
    __version__ = "unknown"
