"""klarrio-build: versioned container builds and gated releases."""

__version__ = "0.1.0"
