"""cipack: CI build, lint, test and release packaging for cargo binaries."""

__version__ = "0.1.0"
