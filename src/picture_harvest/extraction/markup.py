# ABOUTME: Extracts picture ids from JSON payloads embedded in HTML script blocks
# ABOUTME: Parses HTML with BeautifulSoup/lxml; bad markup or bad JSON is logged and skipped

import json
from typing import Any

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from picture_harvest.core.pictures import PictureSet
from picture_harvest.utils.logging import get_logger

JSON_SCRIPT_SELECTOR = 'script[type="application/json"]'

logger = get_logger(__name__)


class MarkupParseError(Exception):
    """Raised when an HTML body or an embedded JSON payload cannot be parsed."""

    pass


def parse_document(html: str) -> BeautifulSoup:
    """Parse an HTML fragment into a document tree.

    Raises:
        MarkupParseError: If the parser rejects the markup
    """
    try:
        return BeautifulSoup(html, "lxml")
    except (ParserRejectedMarkup, TypeError, ValueError) as e:
        raise MarkupParseError(f"Failed to parse HTML body: {e}") from e


def load_payload(text: str) -> Any:
    """Decode the text of one script block.

    Raises:
        MarkupParseError: If the text is not valid JSON, or holds numbers or nesting
            beyond what the decoder accepts
    """
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        raise MarkupParseError(f"Failed to parse script payload: {e}") from e


def picture_id_from_payload(payload: Any) -> str | None:
    """Return the picture id of a PICTURE payload, None for any other shape."""
    match payload:
        case {"type": "PICTURE", "picture": {"id": str() as picture_id}}:
            return picture_id
        case _:
            return None


def extract_from_html(html: str, sink: PictureSet) -> int:
    """Add the ids of every PICTURE payload found in the HTML to the sink.

    Never raises: unparseable HTML is skipped entirely, an unparseable script block
    is skipped on its own and the remaining blocks are still read.

    Returns:
        Number of picture payloads found (duplicates included)
    """
    try:
        document = parse_document(html)
    except MarkupParseError as e:
        logger.warning("Skipping HTML body", error=str(e), html_length=len(html))
        return 0

    found = 0
    for index, script in enumerate(document.select(JSON_SCRIPT_SELECTOR)):
        try:
            payload = load_payload(script.string or "")
        except MarkupParseError as e:
            logger.warning("Skipping script block", error=str(e), script_index=index)
            continue

        picture_id = picture_id_from_payload(payload)
        if picture_id is not None:
            sink.add(picture_id)
            found += 1

    return found
