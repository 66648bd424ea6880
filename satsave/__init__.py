"""Reader for Satisfactory save files: header, compressed body, levels, objects and properties."""

__version__ = "0.1.0"
__all__ = ["__version__"]