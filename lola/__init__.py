"""LoLa: a web-browsing agent driven by a bounded plan/act loop."""

__version__ = "0.1.0"
