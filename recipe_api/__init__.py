"""Recipe API - CRUD service for recipes, categories, ingredients and tags."""

__version__ = "1.0.0"
