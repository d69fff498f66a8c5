"""Right-of-way phrase referee."""

__version__ = "0.1.0"
