# ABOUTME: DynamoDB-backed record source reading a table with paginated Scan requests
# ABOUTME: Decodes attribute-value maps into plain Python mappings for traversal

from decimal import DecimalException
from typing import Any

import boto3
from boto3.dynamodb.types import TypeDeserializer
from botocore.exceptions import BotoCoreError, ClientError

from picture_harvest.store.base import ContinuationToken, Page, RawRecord, StoreError
from picture_harvest.utils.logging import get_logger
from picture_harvest.utils.retry import store_retry

_deserializer = TypeDeserializer()


def decode_record(raw: RawRecord) -> dict[str, Any]:
    """Convert one DynamoDB attribute-value map into a plain mapping.

    Raises:
        StoreError: If the record is not a valid attribute-value map
    """
    if not isinstance(raw, dict):
        raise StoreError(f"Record is not an attribute map: {type(raw).__name__}")
    try:
        return {key: _deserializer.deserialize(value) for key, value in raw.items()}
    except (TypeError, ValueError, KeyError, AttributeError, IndexError, DecimalException) as e:
        raise StoreError(f"Failed to decode record: {e}") from e


class DynamoDBRecordSource:
    """Record source that pages through a DynamoDB table with Scan."""

    def __init__(
        self,
        table_name: str,
        client: Any | None = None,
        page_size: int | None = None,
        region_name: str | None = None,
        retry_attempts: int = 1,
    ):
        """Initialize the source.

        Args:
            table_name: Table to scan
            client: Low-level DynamoDB client (optional, built from the boto3 discovery chain)
            page_size: Scan Limit per request, store default if None
            region_name: Region used when building the client
            retry_attempts: Attempts per page, 1 keeps a failed fetch fatal
        """
        self.table_name = table_name
        try:
            self.client = client or boto3.client("dynamodb", region_name=region_name)  # Allow for dependency injection
        except BotoCoreError as e:
            raise StoreError(f"Failed to create DynamoDB client: {e}") from e
        self.page_size = page_size
        self.retry_attempts = retry_attempts
        self.logger = get_logger(__name__)

    def fetch_page(self, token: ContinuationToken | None = None) -> Page:
        """Scan one page of the table starting at the given token."""
        request: dict[str, Any] = {"TableName": self.table_name}
        if token is not None:
            request["ExclusiveStartKey"] = token
        if self.page_size is not None:
            request["Limit"] = self.page_size

        try:
            for attempt in store_retry(self.retry_attempts, retry_on=(ClientError, BotoCoreError)):
                with attempt:
                    response = self.client.scan(**request)
        except (ClientError, BotoCoreError) as e:
            self.logger.error(
                "Scan failed", table_name=self.table_name, error=str(e), error_type=type(e).__name__
            )
            raise StoreError(f"Scan of {self.table_name} failed: {e}") from e

        records = response.get("Items", [])
        next_token = response.get("LastEvaluatedKey") or None

        self.logger.debug(
            "Fetched page", table_name=self.table_name, record_count=len(records), has_next=next_token is not None
        )

        return Page(records=records, next_token=next_token)
