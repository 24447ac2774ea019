"""Oz Action — run the Oz agent CLI from a CI pipeline step."""

__version__ = "0.1.0"
