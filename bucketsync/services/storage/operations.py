"""
Low-level object storage operations.

Provides the storage client used by the sync policy: put, list, delete,
batch delete and JSON upload on top of a boto3 S3 client. Any
S3-compatible endpoint works.
"""
import json
import mimetypes
from typing import Dict, Iterable, List, Optional

from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from ...errors import ReadError, TransportError
from ...models.options import UploadOptions
from ...models.remote_object import RemoteObject
from ...utils.logger import get_logger

log = get_logger(__name__)

# S3 DeleteObjects accepts at most 1000 keys per request
DELETE_BATCH_SIZE = 1000

# HTTP header name (lower case) -> boto3 ExtraArgs key
_HEADER_ARGS = {
    'cache-control': 'CacheControl',
    'content-type': 'ContentType',
    'content-encoding': 'ContentEncoding',
    'content-disposition': 'ContentDisposition',
    'content-language': 'ContentLanguage',
    'expires': 'Expires',
    'x-amz-acl': 'ACL',
    'x-oss-object-acl': 'ACL',
    'x-amz-storage-class': 'StorageClass',
    'x-oss-storage-class': 'StorageClass',
}

_METADATA_PREFIXES = ('x-amz-meta-', 'x-oss-meta-')


def build_extra_args(options: Optional[UploadOptions], local_path: Optional[str] = None) -> Dict:
    """
    Translate an upload header map into boto3 ``ExtraArgs``.

    ``Content-Type`` is guessed from *local_path* when not given.

    Args:
        options: Upload options (may be None)
        local_path: Local file path used for content-type guessing

    Returns:
        Dictionary suitable for ``upload_file(ExtraArgs=...)``
    """
    extra_args = {}
    metadata = {}

    headers = options.headers if options else {}
    for name, value in headers.items():
        lowered = name.lower()
        if lowered in _HEADER_ARGS:
            extra_args[_HEADER_ARGS[lowered]] = value
            continue
        prefix = next((p for p in _METADATA_PREFIXES if lowered.startswith(p)), None)
        if prefix:
            metadata[lowered[len(prefix):]] = value
            continue
        log.warning("Ignoring unsupported upload header %s", name)

    if metadata:
        extra_args['Metadata'] = metadata

    if 'ContentType' not in extra_args and local_path:
        content_type, _ = mimetypes.guess_type(local_path)
        if content_type:
            extra_args['ContentType'] = content_type

    return extra_args


class StorageOperations:
    """Primitive bucket operations.

    Every remote failure is raised as :class:`TransportError`; nothing is
    retried here.

    Args:
        bucket_name: Target bucket
        s3_client: boto3 S3 client
        dry_run: Log mutating calls instead of performing them
    """

    def __init__(self, bucket_name, s3_client, dry_run=False):
        self.bucket_name = bucket_name
        self.s3_client = s3_client
        self.dry_run = dry_run

    @classmethod
    def from_config(cls, config, dry_run=False):
        """Build from a merged configuration dictionary."""
        from ...utils.aws import create_s3_client

        return cls(config['bucket'], create_s3_client(config), dry_run=dry_run)

    def put(self, key, local_path, options=None):
        """Upload a local file, overwriting any object at *key*.

        Args:
            key: Object key
            local_path: Local file path
            options: UploadOptions with the header map

        Raises:
            ReadError: If the local file cannot be read
            TransportError: If the upload fails
        """
        extra_args = build_extra_args(options, local_path)
        if self.dry_run:
            log.info("[dry-run] Upload %s", key)
            return
        try:
            self.s3_client.upload_file(
                local_path, self.bucket_name, key,
                ExtraArgs=extra_args or None,
            )
        except OSError as e:
            raise ReadError(local_path, e) from e
        except (S3UploadFailedError, ClientError, BotoCoreError) as e:
            raise TransportError('put', key, e) from e

    def upload_json(self, key, data, options=None):
        """Serialize *data* as JSON and upload it to *key*.

        Raises:
            TransportError: If the upload fails
        """
        extra_args = build_extra_args(options)
        extra_args.setdefault('ContentType', 'application/json')
        body = json.dumps(data).encode('utf-8')
        if self.dry_run:
            log.info("[dry-run] Upload %s (%d bytes)", key, len(body))
            return
        try:
            self.s3_client.put_object(Bucket=self.bucket_name, Key=key, Body=body, **extra_args)
        except (ClientError, BotoCoreError) as e:
            raise TransportError('put', key, e) from e

    def list(self, prefix: str = "") -> List[RemoteObject]:
        """List every object whose key starts with *prefix*.

        Raises:
            TransportError: If the listing fails
        """
        objects = []
        try:
            paginator = self.s3_client.get_paginator('list_objects_v2')
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
                for entry in page.get('Contents', []):
                    objects.append(RemoteObject.from_listing(entry))
        except (ClientError, BotoCoreError) as e:
            raise TransportError('list', prefix, e) from e

        log.debug("Listing %r returned %d object(s)", prefix, len(objects))
        return objects

    def delete(self, key):
        """Delete a single object.

        Raises:
            TransportError: If the delete fails
        """
        if self.dry_run:
            log.info("[dry-run] Delete %s", key)
            return
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise TransportError('delete', key, e) from e

    def delete_multi(self, keys: Iterable[str]) -> List[str]:
        """Delete many objects with batched ``DeleteObjects`` requests.

        Args:
            keys: Object keys

        Returns:
            Keys the service reported as deleted

        Raises:
            TransportError: If a batch request fails or reports per-key errors
        """
        keys = list(keys)
        if self.dry_run:
            for key in keys:
                log.info("[dry-run] Delete %s", key)
            return keys

        deleted = []
        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            batch = keys[start:start + DELETE_BATCH_SIZE]
            try:
                response = self.s3_client.delete_objects(
                    Bucket=self.bucket_name,
                    Delete={'Objects': [{'Key': key} for key in batch], 'Quiet': False},
                )
            except (ClientError, BotoCoreError) as e:
                raise TransportError('delete_multi', batch[0], e) from e

            deleted.extend(item['Key'] for item in response.get('Deleted', []))
            errors = response.get('Errors', [])
            if errors:
                first = errors[0]
                raise TransportError(
                    'delete_multi', first.get('Key'),
                    f"{len(errors)} key(s) not deleted ({first.get('Code')}: {first.get('Message')})",
                )
        return deleted

