"""DiGA FHIR adapter common utilities.

Shared errors, settings and structured logging for all adapter packages.
"""

from diga_common.config import OUTPUT_FILE_NAME_DEFAULT, Settings, get_settings
from diga_common.errors import (
    DigaAdapterError,
    FhirParseError,
    InputFileNotFoundError,
    SerializationError,
)
from diga_common.logging_config import configure_logging, get_logger

__all__ = [
    # Errors
    "DigaAdapterError",
    "FhirParseError",
    "InputFileNotFoundError",
    "SerializationError",
    # Config
    "OUTPUT_FILE_NAME_DEFAULT",
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
]
