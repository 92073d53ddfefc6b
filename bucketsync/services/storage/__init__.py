"""
Object storage package.

- :mod:`operations` — put/list/delete/delete-multi over a boto3 S3 client
"""
from .operations import StorageOperations, build_extra_args

__all__ = [
    'StorageOperations',
    'build_extra_args',
]
