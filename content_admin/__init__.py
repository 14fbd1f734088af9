"""Content management admin backend and table/form state core."""

__version__ = "0.1.0"
