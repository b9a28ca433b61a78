"""PocketDrop - share files and a text snippet with devices on your LAN."""

__version__ = "0.1.0"
