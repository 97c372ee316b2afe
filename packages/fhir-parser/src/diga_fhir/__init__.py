"""DiGA FHIR parser.

Reads the four FHIR XML documents of the DiGA catalog (CatalogEntries,
DeviceDefinitions, ChargeItemDefinitions, Organizations) and merges them
into a ``DigaVerzeichnis``.
"""

from diga_fhir.parser import DigaFhirInputs, ReferenceIndex, parse_verzeichnis
from diga_fhir.xml_reader import FHIR_NS, FhirResource, read_resources

__all__ = [
    "DigaFhirInputs",
    "ReferenceIndex",
    "parse_verzeichnis",
    "FHIR_NS",
    "FhirResource",
    "read_resources",
]
