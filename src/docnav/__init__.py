"""Build sidebar navigation and a search index from JSDoc doclets."""

__version__ = "0.3.0"
