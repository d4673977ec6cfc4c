"""Dossier: Person and Document persistence on SQLAlchemy."""

__version__ = "0.1.0"
__author__ = "Dossier Team"

__all__ = ["__version__", "__author__"]
