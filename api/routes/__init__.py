"""API routes package"""

from . import health, recipes, plans, shopping

__all__ = ["health", "recipes", "plans", "shopping"]
