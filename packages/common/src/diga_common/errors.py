"""Custom error types for the DiGA FHIR adapter.

All errors follow the "fail fast" principle with explicit messages.
"""

from pathlib import Path


class DigaAdapterError(Exception):
    """Base exception for all DiGA FHIR adapter errors."""

    pass


class InputFileNotFoundError(DigaAdapterError):
    """A required FHIR input document could not be opened.

    Raised by the input locator before any parsing happens, so no
    partial catalog is ever produced.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"{path} ({reason})")


class FhirParseError(DigaAdapterError):
    """Error reading a FHIR XML document (malformed XML, unexpected root)."""

    pass


class SerializationError(DigaAdapterError):
    """Error rendering the catalog as JSON.

    Unrecoverable: the run is aborted.
    """

    pass
