# ABOUTME: Writes the harvested picture ids to disk as a pretty-printed JSON array
# ABOUTME: Overwrites the target file and applies fixed 0644 permissions

import json
from collections.abc import Iterable
from pathlib import Path

from picture_harvest.utils.logging import log_step

DEFAULT_OUTPUT_PATH = Path("pictures.json")
OUTPUT_FILE_MODE = 0o644


class OutputWriteError(Exception):
    """Raised when the picture list cannot be written."""

    pass


@log_step("write_pictures")
def write_pictures(pictures: Iterable[str], path: str | Path = DEFAULT_OUTPUT_PATH) -> Path:
    """Write picture ids as an indented JSON array, replacing any existing file.

    Args:
        pictures: Picture ids in the order they should appear
        path: Destination file

    Returns:
        The path written

    Raises:
        OutputWriteError: If serialization or the write fails
    """
    path = Path(path)
    try:
        output = json.dumps(list(pictures), indent=2)
        path.write_text(output, encoding="utf-8")
        path.chmod(OUTPUT_FILE_MODE)
    except (OSError, TypeError, ValueError) as e:
        raise OutputWriteError(f"Failed to write {path}: {e}") from e
    return path
