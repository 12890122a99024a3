# ABOUTME: Picture id extraction from decoded records and their embedded HTML
# ABOUTME: Exports the record traverser and the script-block markup extractor

from .markup import MarkupParseError, extract_from_html, picture_id_from_payload
from .traversal import HTML_BODY_KEY, PICTURE_KEYS, traverse

__all__ = [
    "HTML_BODY_KEY",
    "MarkupParseError",
    "PICTURE_KEYS",
    "extract_from_html",
    "picture_id_from_payload",
    "traverse",
]
