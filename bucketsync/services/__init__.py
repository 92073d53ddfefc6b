"""
Sync services for bucketsync.

- storage/ - primitive bucket operations over boto3
- policy - per-file upload decisions
- cleanup - old-version removal
- sync_engine - directory walk driving the policy
- force_client - clear-bucket-and-upload path
"""
from .storage import StorageOperations
from .cleanup import OldVersionCleanup
from .policy import UploadPolicy
from .sync_engine import DirectorySync
from .force_client import ForceUploader

__all__ = [
    'StorageOperations',
    'OldVersionCleanup',
    'UploadPolicy',
    'DirectorySync',
    'ForceUploader',
]
