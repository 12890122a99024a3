# ABOUTME: Tests for the DynamoDB record source and attribute-value decoding
# ABOUTME: Uses botocore's Stubber so no AWS calls are made

from decimal import Decimal

import boto3
import pytest
from botocore.stub import Stubber

from picture_harvest.store.base import iter_pages
from picture_harvest.store.dynamodb import DynamoDBRecordSource, StoreError, decode_record

TABLE = "content-test"


@pytest.fixture
def dynamodb_client():
    return boto3.client(
        "dynamodb",
        region_name="eu-west-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(dynamodb_client):
    with Stubber(dynamodb_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


class TestDecodeRecord:
    """Test conversion from attribute-value maps to plain mappings."""

    def test_nested_record(self):
        raw = {
            "id": {"S": "article-1"},
            "views": {"N": "12"},
            "published": {"BOOL": True},
            "deleted": {"NULL": True},
            "picture": {"M": {"id": {"S": "P1"}}},
            "blocks": {"L": [{"M": {"htmlBody": {"S": "<p>hi</p>"}}}, {"S": "loose"}]},
            "tags": {"SS": ["a", "b"]},
        }

        record = decode_record(raw)

        assert record == {
            "id": "article-1",
            "views": Decimal("12"),
            "published": True,
            "deleted": None,
            "picture": {"id": "P1"},
            "blocks": [{"htmlBody": "<p>hi</p>"}, "loose"],
            "tags": {"a", "b"},
        }

    def test_unknown_type_descriptor_fails(self):
        with pytest.raises(StoreError):
            decode_record({"id": {"XX": "value"}})

    def test_malformed_attribute_fails(self):
        with pytest.raises(StoreError):
            decode_record({"id": "not-an-attribute-value"})

    def test_non_mapping_record_fails(self):
        with pytest.raises(StoreError):
            decode_record(["not", "a", "map"])  # type: ignore[arg-type]

    @pytest.mark.parametrize("number", ["1E+200", "1.00000000000000000000000000000000000000001"])
    def test_number_outside_dynamodb_precision_fails(self, number):
        with pytest.raises(StoreError):
            decode_record({"score": {"N": number}})


class TestDynamoDBRecordSource:
    """Test Scan pagination against a stubbed client."""

    def test_first_page_has_no_start_key(self, dynamodb_client, stubber):
        stubber.add_response(
            "scan",
            {"Items": [{"id": {"S": "a"}}], "Count": 1, "ScannedCount": 1},
            expected_params={"TableName": TABLE},
        )
        source = DynamoDBRecordSource(TABLE, client=dynamodb_client)

        page = source.fetch_page()

        assert page.records == [{"id": {"S": "a"}}]
        assert page.is_last

    def test_token_and_limit_are_forwarded(self, dynamodb_client, stubber):
        token = {"id": {"S": "a"}}
        stubber.add_response(
            "scan",
            {"Items": [], "Count": 0, "ScannedCount": 0, "LastEvaluatedKey": {"id": {"S": "b"}}},
            expected_params={"TableName": TABLE, "ExclusiveStartKey": token, "Limit": 25},
        )
        source = DynamoDBRecordSource(TABLE, client=dynamodb_client, page_size=25)

        page = source.fetch_page(token)

        assert page.records == []
        assert page.next_token == {"id": {"S": "b"}}

    def test_three_page_scan(self, dynamodb_client, stubber):
        stubber.add_response(
            "scan",
            {"Items": [{"id": {"S": "1"}}], "LastEvaluatedKey": {"id": {"S": "1"}}},
            expected_params={"TableName": TABLE},
        )
        stubber.add_response(
            "scan",
            {"Items": [{"id": {"S": "2"}}], "LastEvaluatedKey": {"id": {"S": "2"}}},
            expected_params={"TableName": TABLE, "ExclusiveStartKey": {"id": {"S": "1"}}},
        )
        stubber.add_response(
            "scan",
            {"Items": [{"id": {"S": "3"}}]},
            expected_params={"TableName": TABLE, "ExclusiveStartKey": {"id": {"S": "2"}}},
        )
        source = DynamoDBRecordSource(TABLE, client=dynamodb_client)

        records = [decode_record(raw) for page in iter_pages(source) for raw in page.records]

        assert records == [{"id": "1"}, {"id": "2"}, {"id": "3"}]

    def test_client_error_becomes_store_error(self, dynamodb_client, stubber):
        stubber.add_client_error(
            "scan", service_error_code="ResourceNotFoundException", service_message="Table not found"
        )
        source = DynamoDBRecordSource(TABLE, client=dynamodb_client)

        with pytest.raises(StoreError, match="Table not found"):
            source.fetch_page()

    def test_failure_is_not_retried_by_default(self, dynamodb_client, stubber):
        stubber.add_client_error("scan", service_error_code="InternalServerError")
        stubber.add_response("scan", {"Items": []})
        source = DynamoDBRecordSource(TABLE, client=dynamodb_client)

        with pytest.raises(StoreError):
            source.fetch_page()

        # The queued success is still pending, consume it so the fixture check passes
        assert source.fetch_page().records == []

    def test_opt_in_retry_recovers(self, dynamodb_client, stubber, monkeypatch):
        monkeypatch.setattr("picture_harvest.utils.retry.wait_exponential", lambda **_: lambda _state: 0)
        stubber.add_client_error("scan", service_error_code="ProvisionedThroughputExceededException")
        stubber.add_response("scan", {"Items": [{"id": {"S": "a"}}]})
        source = DynamoDBRecordSource(TABLE, client=dynamodb_client, retry_attempts=2)

        page = source.fetch_page()

        assert page.records == [{"id": {"S": "a"}}]
