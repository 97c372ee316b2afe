"""DiGA Contracts - Pure Pydantic schemas.

This package contains ONLY Pydantic schemas with no business logic.
Dependencies: pydantic only (no logging, no XML parsing).
"""

from diga_contracts.models import (
    # Catalog
    DigaVerzeichnis,
    Diga,
    DigaModule,
    PrescriptionUnit,
    Price,
    # Manufacturer
    Manufacturer,
    Address,
)

__version__ = "1.0.0"

__all__ = [
    # Catalog
    "DigaVerzeichnis",
    "Diga",
    "DigaModule",
    "PrescriptionUnit",
    "Price",
    # Manufacturer
    "Manufacturer",
    "Address",
]
