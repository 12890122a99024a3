# ABOUTME: Record source layer - paginated reads from the backing key-value store
# ABOUTME: Exports the source protocol, page container, and DynamoDB implementation

from .base import ContinuationToken, Page, RawRecord, RecordSource, StoreError, iter_pages
from .dynamodb import DynamoDBRecordSource, decode_record

__all__ = [
    "ContinuationToken",
    "DynamoDBRecordSource",
    "Page",
    "RawRecord",
    "RecordSource",
    "StoreError",
    "decode_record",
    "iter_pages",
]
