"""
Force upload: empty the bucket, then upload every file.

This path applies no policy at all: no exclusions, no fingerprint
handling, no skip or version cleanup.
"""
import os
from typing import List

from ..errors import ReadError
from ..utils.logger import get_logger
from .sync_engine import build_remote_key


class ForceUploader:
    """Clears a bucket and re-uploads a directory tree.

    Args:
        storage: Storage client (``list``, ``delete_multi``, ``put``)
        log: Logger for progress output
    """

    def __init__(self, storage, log=None):
        self.storage = storage
        self.log = log or get_logger(__name__)

    def clear_bucket(self) -> List[str]:
        """Delete every object in the bucket.

        Returns:
            Keys reported as deleted
        """
        existing = self.storage.list()
        if not existing:
            self.log.info("Bucket is empty")
            return []

        deleted = self.storage.delete_multi([obj.name for obj in existing])
        self.log.info("Bucket cleared, %d object(s) deleted", len(deleted))
        for key in deleted:
            self.log.debug("Deleted %s", key)
        return deleted

    def upload(self, local_dir: str, remote_prefix: str = "") -> List[str]:
        """Upload every file under *local_dir*.

        Returns:
            Uploaded keys, in upload order

        Raises:
            ReadError: If a directory or file cannot be read
            TransportError: If an upload fails
        """
        uploaded = []
        self._upload_dir(local_dir, remote_prefix, uploaded)
        return uploaded

    def _upload_dir(self, local_dir, remote_prefix, uploaded):
        try:
            names = os.listdir(local_dir)
        except OSError as e:
            raise ReadError(local_dir, e) from e

        for name in names:
            local_path = os.path.join(local_dir, name)
            if os.path.isdir(local_path):
                if not os.path.islink(local_path):
                    self._upload_dir(local_path, build_remote_key(remote_prefix, name), uploaded)
                continue

            key = build_remote_key(remote_prefix, name)
            self.storage.put(key, local_path)
            uploaded.append(key)
            self.log.info("Uploaded %s", key)
