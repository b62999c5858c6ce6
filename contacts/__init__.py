"""Student contacts client: roster fetching, search and detail selection."""

__version__ = "1.0.0"
