"""
Exception hierarchy for bucketsync.

Storage and filesystem failures are wrapped in these types so callers can
tell a local read problem from a remote one without importing botocore.
"""


class BucketSyncError(Exception):
    """Base class for all bucketsync errors."""


class ConfigError(BucketSyncError):
    """Invalid configuration file, ``--config`` payload or exclusion pattern."""


class MalformedAccessCredentials(BucketSyncError):
    """Access key file is missing, unreadable or not in ``id,secret`` form."""


class ReadError(BucketSyncError):
    """A local file or directory could not be read."""

    def __init__(self, path, cause=None):
        self.path = path
        self.cause = cause
        message = f"Cannot read {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class TransportError(BucketSyncError):
    """A remote storage operation (put/list/delete) failed."""

    def __init__(self, operation, key, cause=None):
        self.operation = operation
        self.key = key
        self.cause = cause
        target = f" {key}" if key else ""
        message = f"{operation}{target} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
