"""Shared constants and the resolved run configuration.

Kept separate from ``main`` so the input and output modules can import
them without circular dependencies.
"""

from dataclasses import dataclass
from pathlib import Path

# Literal --output-file value selecting standard output
STDOUT_TARGET = "-"

# Required FHIR documents, in the order the parser consumes them
CATALOG_ENTRIES_FILE = "CatalogEntries.xml"
DEVICE_DEFINITIONS_FILE = "DeviceDefinitions.xml"
CHARGE_ITEM_DEFINITIONS_FILE = "ChargeItemDefinitions.xml"
ORGANIZATIONS_FILE = "Organizations.xml"

INPUT_FILE_NAMES = (
    CATALOG_ENTRIES_FILE,
    DEVICE_DEFINITIONS_FILE,
    CHARGE_ITEM_DEFINITIONS_FILE,
    ORGANIZATIONS_FILE,
)


@dataclass(frozen=True)
class RunConfig:
    """Arguments of one conversion, resolved once from the command line."""

    input_dir: Path
    output_target: str

    @property
    def to_stdout(self) -> bool:
        return self.output_target == STDOUT_TARGET
