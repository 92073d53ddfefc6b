"""
bucketsync — Deploy a local build directory to an object-storage bucket.

Uploads fingerprinted build artifacts with long-lived cache headers,
keeps HTML entry points uncached and prunes superseded versions.
"""

__version__ = "1.0.0"
