"""Pydantic models for the consolidated DiGA catalog (DiGA-Verzeichnis).

Attribute names are snake_case; JSON keys are camelCase aliases.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CatalogModel(BaseModel):
    """Base for all catalog models: camelCase JSON, populate by name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(_CatalogModel):
    """Postal address of a manufacturer."""

    lines: list[str] = Field(default_factory=list, description="Street lines")
    postal_code: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None)
    country: Optional[str] = Field(default=None)


class Manufacturer(_CatalogModel):
    """DiGA manufacturer (FHIR Organization)."""

    id: str = Field(description="Organization resource id")
    name: Optional[str] = Field(default=None, description="Legal name")
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)
    address: Optional[Address] = Field(default=None)


class Price(_CatalogModel):
    """Price of a prescription unit."""

    amount: float = Field(description="Price amount")
    currency: str = Field(default="EUR", description="ISO 4217 currency code")


class PrescriptionUnit(_CatalogModel):
    """Prescribable unit (Verordnungseinheit) of a DiGA module.

    Sourced from a FHIR ChargeItemDefinition.
    """

    id: str = Field(description="ChargeItemDefinition resource id")
    pzn: Optional[str] = Field(default=None, description="Pharmazentralnummer")
    title: Optional[str] = Field(default=None)
    status: Optional[str] = Field(default=None, description="draft, active, retired, unknown")
    price: Optional[Price] = Field(default=None)
    valid_from: Optional[str] = Field(default=None)
    valid_to: Optional[str] = Field(default=None)


class DigaModule(_CatalogModel):
    """Module of a DiGA (child FHIR DeviceDefinition)."""

    id: str = Field(description="DeviceDefinition resource id")
    name: Optional[str] = Field(default=None)
    version: Optional[str] = Field(default=None)
    prescription_units: list[PrescriptionUnit] = Field(default_factory=list)


class Diga(_CatalogModel):
    """One catalog entry: a listed digital health application."""

    id: str = Field(description="CatalogEntry resource id")
    diga_id: Optional[str] = Field(default=None, description="DiGA identifier from the catalog")
    name: Optional[str] = Field(default=None, description="Application name")
    status: Optional[str] = Field(default=None, description="Catalog entry status")
    listing_status: Optional[str] = Field(
        default=None, description="Listing classification (e.g. permanent, preliminary)"
    )
    valid_from: Optional[str] = Field(default=None)
    valid_to: Optional[str] = Field(default=None)
    last_updated: Optional[str] = Field(default=None)
    url: Optional[str] = Field(default=None, description="Application website")
    languages: list[str] = Field(default_factory=list)
    manufacturer: Optional[Manufacturer] = Field(default=None)
    modules: list[DigaModule] = Field(default_factory=list)


class DigaVerzeichnis(_CatalogModel):
    """The consolidated DiGA catalog."""

    digas: list[Diga] = Field(default_factory=list)
