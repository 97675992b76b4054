"""mdview - serve a directory of markdown files as HTML pages."""

__version__ = "0.1.0"
