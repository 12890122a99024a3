# ABOUTME: Walks a decoded content record and collects the picture ids it references
# ABOUTME: Direct references live under logo/picture keys, indirect ones inside htmlBody markup

from collections.abc import Mapping
from typing import Any

from picture_harvest.core.pictures import PictureSet
from picture_harvest.extraction.markup import extract_from_html

HTML_BODY_KEY = "htmlBody"
PICTURE_KEYS = frozenset({"lightModeLogo", "darkModeLogo", "picture"})

# Lists walked along any path from the record root
DEFAULT_MAX_SEQUENCE_DEPTH = 1


def traverse(node: Any, sink: PictureSet, max_sequence_depth: int = DEFAULT_MAX_SEQUENCE_DEPTH) -> int:
    """Collect every picture id referenced by a decoded record into the sink.

    Nested mappings are walked to any depth. A list is walked only while fewer than
    ``max_sequence_depth`` lists have been entered on the way down, and only its
    mapping elements are visited. With the default of 1,
    ``{"items": [{"picture": {"id": "X"}}]}`` yields ``X`` but
    ``{"items": [{"items": [{"picture": {"id": "X"}}]}]}`` yields nothing.

    Values of unexpected types are skipped, so this never raises on odd records.

    Args:
        node: Decoded record; anything other than a mapping contributes nothing
        sink: Set receiving the ids
        max_sequence_depth: Number of list levels walked along one path

    Returns:
        Number of picture references found (duplicates included)
    """
    if not isinstance(node, Mapping):
        return 0

    found = 0
    stack: list[tuple[Mapping, int]] = [(node, 0)]

    while stack:
        mapping, sequence_depth = stack.pop()

        for key, value in mapping.items():
            if value is None:
                continue

            if key == HTML_BODY_KEY:
                if isinstance(value, str):
                    found += extract_from_html(value, sink)
                continue

            if key in PICTURE_KEYS:
                match value:
                    case {"id": str() as picture_id}:
                        sink.add(picture_id)
                        found += 1
                continue

            match value:
                case Mapping():
                    stack.append((value, sequence_depth))
                case list() | tuple() if sequence_depth < max_sequence_depth:
                    stack.extend((item, sequence_depth + 1) for item in value if isinstance(item, Mapping))

    return found
