# API endpoints
from . import health, categories, items, changelog

__all__ = ["health", "categories", "items", "changelog"]
