"""Input locator: opens the four FHIR documents of a catalog export."""

from contextlib import ExitStack
from pathlib import Path

from diga_common import InputFileNotFoundError
from diga_fhir import DigaFhirInputs

from diga_cli._shared import INPUT_FILE_NAMES


def required_input_paths(input_dir: Path) -> list[Path]:
    """Paths of the required FHIR documents below ``input_dir``, in parser order."""
    return [Path(input_dir) / name for name in INPUT_FILE_NAMES]


def open_inputs(input_dir: Path, stack: ExitStack) -> DigaFhirInputs:
    """Open all required input documents as binary streams.

    Streams are registered on ``stack``, which closes them on every exit
    path, including a failure to open a later file.

    Args:
        input_dir: Directory holding the FHIR XML export
        stack: Owner of the opened streams

    Returns:
        The opened streams, ready for parsing

    Raises:
        InputFileNotFoundError: If any document cannot be opened
    """
    streams = []
    for path in required_input_paths(input_dir):
        try:
            streams.append(stack.enter_context(open(path, "rb")))
        except OSError as e:
            raise InputFileNotFoundError(path, e.strerror or str(e)) from e
    return DigaFhirInputs(*streams)
