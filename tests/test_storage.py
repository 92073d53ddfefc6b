"""Tests for the boto3-backed storage operations."""

import json
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import ClientError

from bucketsync.errors import ReadError, TransportError
from bucketsync.models.options import UploadOptions
from bucketsync.services.storage.operations import (
    DELETE_BATCH_SIZE,
    StorageOperations,
    build_extra_args,
)

MODIFIED = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _client_error(operation):
    return ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, operation)


def _setup_s3_mock(pages=None):
    s3 = Mock()
    paginator = Mock()
    s3.get_paginator.return_value = paginator
    paginator.paginate.return_value = pages if pages is not None else [{"Contents": []}]
    return s3


class TestBuildExtraArgs:
    def test_known_headers_and_metadata(self) -> None:
        options = UploadOptions({
            "Cache-Control": "max-age=60",
            "content-encoding": "gzip",
            "x-oss-meta-build": "42",
        })

        args = build_extra_args(options, "app.js")

        assert args["CacheControl"] == "max-age=60"
        assert args["ContentEncoding"] == "gzip"
        assert args["Metadata"] == {"build": "42"}

    def test_content_type_guessed(self) -> None:
        assert build_extra_args(None, "index.html")["ContentType"] == "text/html"

    def test_explicit_content_type_wins(self) -> None:
        options = UploadOptions({"Content-Type": "text/plain"})

        assert build_extra_args(options, "index.html")["ContentType"] == "text/plain"

    def test_unknown_header_ignored(self) -> None:
        assert build_extra_args(UploadOptions({"X-Custom": "1"})) == {}


class TestStorageOperations:
    def test_put_uploads_with_extra_args(self) -> None:
        s3 = _setup_s3_mock()
        storage = StorageOperations("site", s3)

        storage.put("app.a1.js", "/tmp/app.a1.js", UploadOptions({"Cache-Control": "max-age=60"}))

        s3.upload_file.assert_called_once()
        args, kwargs = s3.upload_file.call_args
        assert args == ("/tmp/app.a1.js", "site", "app.a1.js")
        assert kwargs["ExtraArgs"]["CacheControl"] == "max-age=60"

    def test_put_upload_failure_is_transport_error(self) -> None:
        s3 = _setup_s3_mock()
        s3.upload_file.side_effect = S3UploadFailedError(
            "Failed to upload /tmp/a.js to site/a.js: An error occurred (NoSuchBucket) "
            "when calling the PutObject operation"
        )

        with pytest.raises(TransportError) as excinfo:
            StorageOperations("site", s3).put("a.js", "/tmp/a.js")

        assert excinfo.value.operation == "put"
        assert excinfo.value.key == "a.js"

    def test_put_missing_file_is_read_error(self) -> None:
        s3 = _setup_s3_mock()
        s3.upload_file.side_effect = FileNotFoundError("/tmp/missing.js")

        with pytest.raises(ReadError):
            StorageOperations("site", s3).put("missing.js", "/tmp/missing.js")

    def test_list_follows_pages(self) -> None:
        pages = [
            {"Contents": [{"Key": "js/app.1.js", "LastModified": MODIFIED, "Size": 3}]},
            {},
            {"Contents": [{"Key": "js/app.2.js", "LastModified": MODIFIED}]},
        ]
        s3 = _setup_s3_mock(pages)

        objects = StorageOperations("site", s3).list("js/app")

        assert [o.name for o in objects] == ["js/app.1.js", "js/app.2.js"]
        assert objects[0].size == 3
        assert objects[1].last_modified == MODIFIED
        s3.get_paginator.return_value.paginate.assert_called_once_with(Bucket="site", Prefix="js/app")

    def test_list_error(self) -> None:
        s3 = _setup_s3_mock()
        s3.get_paginator.return_value.paginate.side_effect = _client_error("ListObjectsV2")

        with pytest.raises(TransportError, match="list"):
            StorageOperations("site", s3).list("js/")

    def test_delete(self) -> None:
        s3 = _setup_s3_mock()

        StorageOperations("site", s3).delete("old.js")

        s3.delete_object.assert_called_once_with(Bucket="site", Key="old.js")

    def test_delete_multi_batches(self) -> None:
        s3 = _setup_s3_mock()
        s3.delete_objects.side_effect = lambda Bucket, Delete: {
            "Deleted": [{"Key": o["Key"]} for o in Delete["Objects"]]
        }
        keys = [f"k{i}" for i in range(DELETE_BATCH_SIZE + 5)]

        deleted = StorageOperations("site", s3).delete_multi(keys)

        assert deleted == keys
        assert s3.delete_objects.call_count == 2

    def test_delete_multi_reports_per_key_errors(self) -> None:
        s3 = _setup_s3_mock()
        s3.delete_objects.return_value = {
            "Deleted": [],
            "Errors": [{"Key": "a", "Code": "AccessDenied", "Message": "denied"}],
        }

        with pytest.raises(TransportError, match="AccessDenied"):
            StorageOperations("site", s3).delete_multi(["a"])

    def test_upload_json(self) -> None:
        s3 = _setup_s3_mock()

        StorageOperations("site", s3).upload_json("manifest.json", {"files": ["a.js"]})

        kwargs = s3.put_object.call_args.kwargs
        assert kwargs["Key"] == "manifest.json"
        assert kwargs["ContentType"] == "application/json"
        assert json.loads(kwargs["Body"]) == {"files": ["a.js"]}

    def test_dry_run_does_not_mutate(self) -> None:
        s3 = _setup_s3_mock()
        storage = StorageOperations("site", s3, dry_run=True)

        storage.put("a.js", "/tmp/a.js")
        storage.delete("b.js")
        assert storage.delete_multi(["c.js"]) == ["c.js"]
        storage.list("")

        s3.upload_file.assert_not_called()
        s3.delete_object.assert_not_called()
        s3.delete_objects.assert_not_called()
        s3.get_paginator.assert_called_once_with("list_objects_v2")
