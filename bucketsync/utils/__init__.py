"""Utility modules for bucketsync.

- filename_parser — prefix/fingerprint/extension splitting
- exception_matcher — exclusion patterns
- config_loader — JSON config file
- credentials — access key files
- aws — boto3 session and S3 client setup
- logger — coloured logging
"""

from .config_loader import ConfigLoader, handle_config_update
from .filename_parser import parse_filename, BUNDLE_MARKER
from .exception_matcher import is_exception, compile_patterns
from .credentials import read_access_key
from .logger import get_logger, setup_logging, log_sync_summary

__all__ = [
    'ConfigLoader',
    'handle_config_update',
    'parse_filename',
    'BUNDLE_MARKER',
    'is_exception',
    'compile_patterns',
    'read_access_key',
    'get_logger',
    'setup_logging',
    'log_sync_summary',
]
