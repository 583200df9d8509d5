"""
Domain layer - Business entities, models, schemas, and enums.
"""

from domain import enums, models, planning, schemas

__all__ = ["enums", "models", "planning", "schemas"]
