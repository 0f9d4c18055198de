"""Book-lookup WSGI service with structured JSON logging and a traffic seeder."""

__version__ = "0.1.0"
__all__ = ["__version__"]