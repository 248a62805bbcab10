"""Tests for the DynamoDB record store."""
from decimal import Decimal

import pytest
from botocore.exceptions import ClientError

from facelookup.core.exceptions import ConfigurationError, StoreError
from facelookup.services.aws.dynamodb import DynamoDBRecordStore
from tests.conftest import FakeAWSSession, make_record


def table_item(name, face_id="f1"):
    return {
        "name": name,
        "image": f"arn:aws:s3:::bucket1/{name}/photo.jpg",
        "faceId": face_id,
        "externalImageId": f"ext-{name}",
        "createdTimestamp": Decimal("1714564800000"),
    }


class FakeTable:
    def __init__(self, pages=None, error=None):
        self.name = None
        self.pages = list(pages or [])
        self.error = error
        self.put_calls = []
        self.scan_calls = []

    async def put_item(self, **kwargs):
        if self.error is not None:
            raise self.error
        self.put_calls.append(kwargs)
        return {}

    async def scan(self, **kwargs):
        self.scan_calls.append(dict(kwargs))
        if self.error is not None:
            raise self.error
        return self.pages.pop(0)


def make_store(table, follow_pages=True, table_name="people"):
    session = FakeAWSSession(table=table)
    store = DynamoDBRecordStore(
        table_name=table_name,
        session=session,
        region_name="eu-west-1",
        access_key_id="",
        secret_access_key="",
        follow_pages=follow_pages,
    )
    return store, session


class TestInsertRecord:
    """Inserting person records."""

    async def test_puts_item_into_table(self):
        table = FakeTable()
        store, session = make_store(table)

        await store.insert_record(make_record("alice"))

        assert table.name == "people"
        assert table.put_calls == [{"Item": {
            "name": "alice",
            "image": "arn:aws:s3:::bucket1/alice/photo.jpg",
            "faceId": "f1",
            "externalImageId": "ext-alice",
            "createdTimestamp": 1714564800000,
        }}]
        assert session.resource_calls[0][0] == "dynamodb"
        assert session.resource_calls[0][1]["region_name"] == "eu-west-1"

    async def test_client_error_is_store_error(self):
        error = ClientError({"Error": {"Code": "AccessDeniedException"}}, "PutItem")
        store, _ = make_store(FakeTable(error=error))

        with pytest.raises(StoreError) as exc_info:
            await store.insert_record(make_record("alice"))

        assert exc_info.value.__cause__ is error

    async def test_requires_table_name(self):
        store, _ = make_store(FakeTable(), table_name="")

        with pytest.raises(ConfigurationError):
            await store.insert_record(make_record("alice"))


class TestFindRecordsByFaceId:
    """Scanning for records by face identifier."""

    async def test_filters_on_face_id(self):
        table = FakeTable(pages=[{"Items": [table_item("bob"), table_item("alice")]}])
        store, _ = make_store(table)

        records = await store.find_records_by_face_id("f1")

        assert [record.name for record in records] == ["bob", "alice"]
        expression = table.scan_calls[0]["FilterExpression"].get_expression()
        assert expression["operator"] == "="
        assert expression["values"][0].name == "faceId"
        assert expression["values"][1] == "f1"

    async def test_follows_pagination(self):
        table = FakeTable(pages=[
            {"Items": [table_item("bob")], "LastEvaluatedKey": {"faceId": "k1"}},
            {"Items": [], "LastEvaluatedKey": {"faceId": "k2"}},
            {"Items": [table_item("alice")]},
        ])
        store, _ = make_store(table)

        records = await store.find_records_by_face_id("f1")

        assert [record.name for record in records] == ["bob", "alice"]
        assert "ExclusiveStartKey" not in table.scan_calls[0]
        assert table.scan_calls[1]["ExclusiveStartKey"] == {"faceId": "k1"}
        assert table.scan_calls[2]["ExclusiveStartKey"] == {"faceId": "k2"}

    async def test_single_page_when_not_following(self):
        table = FakeTable(pages=[
            {"Items": [table_item("bob")], "LastEvaluatedKey": {"faceId": "k1"}},
            {"Items": [table_item("alice")]},
        ])
        store, _ = make_store(table, follow_pages=False)

        records = await store.find_records_by_face_id("f1")

        assert [record.name for record in records] == ["bob"]
        assert len(table.scan_calls) == 1

    async def test_no_items_returns_empty_list(self):
        store, _ = make_store(FakeTable(pages=[{"Items": []}]))

        assert await store.find_records_by_face_id("f9") == []

    async def test_client_error_is_store_error(self):
        error = ClientError({"Error": {"Code": "ProvisionedThroughputExceededException"}}, "Scan")
        store, _ = make_store(FakeTable(error=error))

        with pytest.raises(StoreError):
            await store.find_records_by_face_id("f1")

    async def test_malformed_item_is_store_error(self):
        store, _ = make_store(FakeTable(pages=[{"Items": [{"faceId": "f1"}]}]))

        with pytest.raises(StoreError, match="Malformed record"):
            await store.find_records_by_face_id("f1")
