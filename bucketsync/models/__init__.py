"""
Data models for bucketsync
"""

from .filename_info import FilenameInfo, MINIFIED_SENTINEL
from .remote_object import RemoteObject
from .options import BehaviorOptions, UploadOptions, CACHE_CONTROL, NO_CACHE
from .report import Action, UploadDecision, FileOutcome, SyncReport

__all__ = [
    'FilenameInfo',
    'MINIFIED_SENTINEL',
    'RemoteObject',
    'BehaviorOptions',
    'UploadOptions',
    'CACHE_CONTROL',
    'NO_CACHE',
    'Action',
    'UploadDecision',
    'FileOutcome',
    'SyncReport',
]
