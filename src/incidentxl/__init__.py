"""Fall-incident report conversion into incident analysis workbooks."""

__version__ = "0.1.0"

__all__ = ["__version__"]
