"""
Domain-split Pydantic schemas with an aggregating namespace.
"""

from .locations import CityInput, City, CityOption, BulkDeleteRequest
from .audits import AuditLogBase, AuditLogCreate
from .envelope import Envelope

__all__ = [
    # Locations
    "CityInput",
    "City",
    "CityOption",
    "BulkDeleteRequest",
    # Audits
    "AuditLogBase",
    "AuditLogCreate",
    # Responses
    "Envelope",
]
