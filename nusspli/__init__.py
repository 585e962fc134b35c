"""TMD parsing, fake ticket and certificate building, title lookup and update helpers."""

__version__ = "1.0.0"
__all__ = ["utils", "tmd", "titles", "ticket", "updater"]