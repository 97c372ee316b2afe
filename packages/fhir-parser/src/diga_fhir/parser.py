"""Cross-referencing parser for the DiGA FHIR catalog.

Merges four FHIR documents into one ``DigaVerzeichnis``:

- CatalogEntries: one entry per listed DiGA, ``referencedItem`` points to
  the application DeviceDefinition
- DeviceDefinitions: applications and their modules (``parentDevice``),
  ``manufacturerReference`` points to an Organization
- ChargeItemDefinitions: prescription units with PZN and price,
  ``instance`` points to a module (or the application itself)
- Organizations: manufacturers

Unresolvable references are logged and tolerated; malformed documents
raise ``FhirParseError``.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import BinaryIO, Optional

from diga_common import FhirParseError, get_logger
from diga_contracts import (
    Address,
    Diga,
    DigaModule,
    DigaVerzeichnis,
    Manufacturer,
    PrescriptionUnit,
    Price,
)

from diga_fhir.xml_reader import NS, FhirResource, all_values, first_value, read_resources

logger = get_logger(__name__)

USER_FRIENDLY_NAME = "user-friendly-name"
BASE_PRICE = "base"
DEFAULT_CURRENCY = "EUR"


class ReferenceIndex:
    """Resolves FHIR references to resource ids of one resource type."""

    def __init__(self, resource_type: str, resources: list[FhirResource]):
        self.resource_type = resource_type
        self._by_id: dict[str, FhirResource] = {}
        self._by_full_url: dict[str, str] = {}
        for resource in resources:
            self._by_id[resource.id] = resource
            if resource.full_url:
                self._by_full_url[resource.full_url] = resource.id

    def get(self, resource_id: str) -> Optional[FhirResource]:
        return self._by_id.get(resource_id)

    def resolve(self, reference: Optional[str], source: str) -> Optional[str]:
        """Resolve ``reference`` to a known resource id.

        Accepts ``Type/id``, absolute URLs ending in ``Type/id`` (optionally
        followed by ``/_history/<version>``) and Bundle ``fullUrl`` values.

        Args:
            reference: Reference string, may be None
            source: Referencing resource, used for logging

        Returns:
            Resource id, or None if absent or unresolvable
        """
        if not reference:
            return None

        resource_id = self._by_full_url.get(reference)
        if resource_id is None:
            parts = reference.split("/_history/")[0].rstrip("/").split("/")
            if len(parts) >= 2 and parts[-2] == self.resource_type:
                resource_id = parts[-1]

        if resource_id is None or resource_id not in self._by_id:
            logger.warning(
                "unresolved_reference",
                source=source,
                reference=reference,
                target_type=self.resource_type,
            )
            return None
        return resource_id


@dataclass(frozen=True)
class DigaFhirInputs:
    """The four FHIR input streams of one catalog conversion."""

    catalog_entries: BinaryIO
    device_definitions: BinaryIO
    charge_items: BinaryIO
    organizations: BinaryIO

    def parse(self) -> DigaVerzeichnis:
        return parse_verzeichnis(
            self.catalog_entries,
            self.device_definitions,
            self.charge_items,
            self.organizations,
        )


def parse_verzeichnis(
    catalog_entries: BinaryIO,
    device_definitions: BinaryIO,
    charge_items: BinaryIO,
    organizations: BinaryIO,
) -> DigaVerzeichnis:
    """Parse and cross-reference the four FHIR documents.

    Every stream is read to the end before this returns; closing them is
    up to the caller.

    Returns:
        The merged catalog, digas in CatalogEntries document order

    Raises:
        FhirParseError: If any document cannot be read
    """
    entries = read_resources(catalog_entries, "CatalogEntry")
    devices = read_resources(device_definitions, "DeviceDefinition")
    charges = read_resources(charge_items, "ChargeItemDefinition")
    orgs = read_resources(organizations, "Organization")

    device_index = ReferenceIndex("DeviceDefinition", devices)
    org_index = ReferenceIndex("Organization", orgs)

    manufacturers = {org.id: _to_manufacturer(org) for org in orgs}

    # parent device id -> module resources, DeviceDefinitions order
    children: dict[str, list[FhirResource]] = defaultdict(list)
    for device in devices:
        parent = first_value(device.element, "f:parentDevice/f:reference")
        if parent is None:
            continue
        parent_id = device_index.resolve(parent, f"DeviceDefinition/{device.id}")
        if parent_id is not None:
            children[parent_id].append(device)

    # device id -> prescription units, ChargeItemDefinitions order
    units: dict[str, list[PrescriptionUnit]] = defaultdict(list)
    for charge in charges:
        instance = first_value(charge.element, "f:instance/f:reference")
        device_id = device_index.resolve(instance, f"ChargeItemDefinition/{charge.id}")
        if device_id is None:
            if instance is None:
                logger.warning("charge_item_without_instance", charge_item=charge.id)
            continue
        units[device_id].append(_to_prescription_unit(charge))

    digas = []
    for entry in entries:
        diga = _to_diga(entry)
        app_id = device_index.resolve(
            first_value(entry.element, "f:referencedItem/f:reference"),
            f"CatalogEntry/{entry.id}",
        )
        if app_id is not None:
            app = device_index.get(app_id)
            diga.name = _device_name(app)
            diga.url = app.value("f:url") or app.value("f:onlineInformation")
            diga.languages = app.values("f:languageCode/f:coding/f:code")

            org_ref = app.value("f:manufacturerReference/f:reference") or app.value(
                "f:owner/f:reference"
            )
            org_id = org_index.resolve(org_ref, f"DeviceDefinition/{app_id}")
            if org_id is not None:
                diga.manufacturer = manufacturers[org_id]

            if units.get(app_id):
                diga.modules.append(_to_module(app, units[app_id]))
            for module in children.get(app_id, []):
                diga.modules.append(_to_module(module, units.get(module.id, [])))
        digas.append(diga)

    logger.info(
        "catalog_parsed",
        digas=len(digas),
        device_definitions=len(devices),
        charge_items=len(charges),
        organizations=len(orgs),
    )
    return DigaVerzeichnis(digas=digas)


def _device_name(device: FhirResource) -> Optional[str]:
    friendly = device.value(f"f:deviceName[f:type/@value='{USER_FRIENDLY_NAME}']/f:name")
    return friendly or device.value("f:deviceName/f:name")


def _device_version(device: FhirResource) -> Optional[str]:
    # R4 carries a plain string, R5 a complex type with a nested value
    return device.value("f:version") or device.value("f:version/f:value")


def _to_diga(entry: FhirResource) -> Diga:
    listing = entry.value("f:classification/f:coding/f:code") or entry.value(
        "f:classification/f:text"
    )
    return Diga(
        id=entry.id,
        diga_id=entry.value("f:identifier/f:value"),
        status=entry.value("f:status"),
        listing_status=listing,
        valid_from=entry.value("f:validityPeriod/f:start"),
        valid_to=entry.value("f:validityPeriod/f:end") or entry.value("f:validTo"),
        last_updated=entry.value("f:lastUpdated"),
    )


def _to_module(device: FhirResource, prescription_units: list[PrescriptionUnit]) -> DigaModule:
    return DigaModule(
        id=device.id,
        name=_device_name(device),
        version=_device_version(device),
        prescription_units=list(prescription_units),
    )


def _to_price(charge: FhirResource) -> Optional[Price]:
    component = f"f:propertyGroup/f:priceComponent[f:type/@value='{BASE_PRICE}']/f:amount"
    amount = charge.value(f"{component}/f:value")
    currency = charge.value(f"{component}/f:currency")
    if amount is None:
        amount = charge.value("f:propertyGroup/f:priceComponent/f:amount/f:value")
        currency = charge.value("f:propertyGroup/f:priceComponent/f:amount/f:currency")
    if amount is None:
        return None
    try:
        value = float(amount)
    except ValueError as e:
        raise FhirParseError(
            f"ChargeItemDefinition/{charge.id} has a non-numeric price {amount!r}"
        ) from e
    if not math.isfinite(value):
        raise FhirParseError(
            f"ChargeItemDefinition/{charge.id} has a non-finite price {amount!r}"
        )
    return Price(amount=value, currency=currency or DEFAULT_CURRENCY)


def _to_prescription_unit(charge: FhirResource) -> PrescriptionUnit:
    return PrescriptionUnit(
        id=charge.id,
        pzn=charge.value("f:identifier/f:value"),
        title=charge.value("f:title"),
        status=charge.value("f:status"),
        price=_to_price(charge),
        valid_from=charge.value("f:effectivePeriod/f:start"),
        valid_to=charge.value("f:effectivePeriod/f:end"),
    )


def _to_manufacturer(org: FhirResource) -> Manufacturer:
    telecom: dict[str, str] = {}
    for contact in org.element.iterfind("f:telecom", NS):
        system = first_value(contact, "f:system")
        value = first_value(contact, "f:value")
        if system and value and system not in telecom:
            telecom[system] = value

    address = None
    address_elements = org.element.xpath("f:address[1]", namespaces=NS)
    if address_elements:
        element = address_elements[0]
        address = Address(
            lines=all_values(element, "f:line"),
            postal_code=first_value(element, "f:postalCode"),
            city=first_value(element, "f:city"),
            country=first_value(element, "f:country"),
        )

    return Manufacturer(
        id=org.id,
        name=org.value("f:name"),
        email=telecom.get("email"),
        phone=telecom.get("phone"),
        website=telecom.get("url"),
        address=address,
    )
