"""Reading FHIR resources out of XML documents.

A document is either a FHIR ``Bundle`` (resources under
``entry/resource/*``) or a single bare resource. Primitive values live in
the ``value`` attribute, as the FHIR XML format defines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Optional

from lxml import etree

from diga_common import FhirParseError, get_logger

logger = get_logger(__name__)

FHIR_NS = "http://hl7.org/fhir"
NS = {"f": FHIR_NS}


@dataclass(frozen=True)
class FhirResource:
    """A FHIR resource element together with its identity."""

    resource_type: str
    id: str
    element: etree._Element
    full_url: Optional[str] = None

    def value(self, path: str) -> Optional[str]:
        """First ``@value`` found at ``path`` (FHIR-prefixed XPath), or None."""
        return first_value(self.element, path)

    def values(self, path: str) -> list[str]:
        return all_values(self.element, path)


def first_value(element: etree._Element, path: str) -> Optional[str]:
    found = all_values(element, path)
    return found[0] if found else None


def all_values(element: etree._Element, path: str) -> list[str]:
    """All non-empty ``@value`` attributes at ``path``, in document order.

    Args:
        element: Context element
        path: XPath relative to ``element`` without the trailing ``/@value``,
            with FHIR elements prefixed ``f:`` (e.g. ``f:identifier/f:value``)
    """
    result = element.xpath(f"{path}/@value", namespaces=NS)
    return [str(v).strip() for v in result if str(v).strip()]


def _make_parser() -> etree.XMLParser:
    # No DTD entity expansion and no network lookups for catalog input.
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=True,
        remove_comments=True,
        remove_pis=True,
    )


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _to_resource(
    element: etree._Element, resource_type: str, full_url: Optional[str] = None
) -> FhirResource:
    resource_id = first_value(element, "f:id")
    if not resource_id:
        raise FhirParseError(f"{resource_type} resource without id")
    return FhirResource(
        resource_type=resource_type,
        id=resource_id,
        element=element,
        full_url=full_url,
    )


def read_resources(stream: BinaryIO, resource_type: str) -> list[FhirResource]:
    """Read all resources of ``resource_type`` from an XML stream.

    The stream is consumed completely.

    Args:
        stream: Binary stream over a FHIR XML document
        resource_type: Expected FHIR resource type (e.g. ``CatalogEntry``)

    Returns:
        Resources in document order

    Raises:
        FhirParseError: Malformed XML, a non-FHIR root element, or a root that
            is neither a Bundle nor a ``resource_type`` resource
    """
    try:
        tree = etree.parse(stream, _make_parser())
    except etree.XMLSyntaxError as e:
        raise FhirParseError(f"{resource_type} document is not well-formed XML: {e}") from e

    root = tree.getroot()
    if etree.QName(root).namespace != FHIR_NS:
        raise FhirParseError(
            f"{resource_type} document root {root.tag!r} is not in the FHIR namespace"
        )

    root_name = _local_name(root)
    if root_name == resource_type:
        return [_to_resource(root, resource_type)]
    if root_name != "Bundle":
        raise FhirParseError(
            f"{resource_type} document has unexpected root element {root_name!r}"
        )

    resources: list[FhirResource] = []
    for entry in root.iterfind("f:entry", NS):
        full_url = first_value(entry, "f:fullUrl")
        for element in entry.iterfind("f:resource/*", NS):
            found_type = _local_name(element)
            if found_type != resource_type:
                logger.debug(
                    "skipping_resource",
                    expected=resource_type,
                    found=found_type,
                )
                continue
            resources.append(_to_resource(element, resource_type, full_url))
    return resources
