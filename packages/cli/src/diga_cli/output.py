"""Serializer and writer for the consolidated catalog."""

from pathlib import Path
from typing import Optional

import typer
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from diga_common import OUTPUT_FILE_NAME_DEFAULT, SerializationError, get_logger

from diga_cli._shared import STDOUT_TARGET

logger = get_logger(__name__)

JSON_INDENT = 2


def serialize_verzeichnis(verzeichnis: BaseModel) -> str:
    """Render the catalog as pretty-printed JSON.

    Keys appear in field declaration order, camelCase, with non-ASCII
    characters kept as is.

    Raises:
        SerializationError: If the catalog cannot be rendered
    """
    try:
        return verzeichnis.model_dump_json(indent=JSON_INDENT, by_alias=True)
    except PydanticSerializationError as e:
        raise SerializationError(f"Cannot serialize catalog: {e}") from e


def write_output(
    json_text: str,
    output_target: Optional[str],
    default_file: str = OUTPUT_FILE_NAME_DEFAULT,
    encoding: str = "utf-8",
) -> None:
    """Write ``json_text`` to stdout (``-``) or to a file.

    I/O and encoding errors are logged and not raised; the run still ends
    normally. The text is encoded before the file is opened, so an
    unencodable catalog leaves no partial file behind.

    Args:
        json_text: Serialized catalog
        output_target: ``-`` for stdout, a file path, or None for the default
        default_file: File used when ``output_target`` is unset
        encoding: Encoding of the written file
    """
    if output_target == STDOUT_TARGET:
        typer.echo(json_text, nl=False)
        return

    path = Path(default_file if output_target is None else output_target)
    try:
        data = json_text.encode(encoding)
        if path.exists():
            logger.info("output_file_overwritten", path=str(path))
        else:
            logger.info("output_file_created", path=str(path))
        with open(path, "wb") as f:
            f.write(data)
    except (OSError, UnicodeError, LookupError) as e:
        logger.error("output_write_failed", path=str(path), error=str(e))
