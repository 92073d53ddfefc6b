"""
Old-version cleanup.

Given every remote version of one file (same prefix and extension), keep
the most recently modified one and delete the rest.
"""
from typing import List, Sequence

from ..models.remote_object import RemoteObject
from ..utils.logger import get_logger

# Fewer same-family objects than this are left alone, so one previous
# version always survives next to the file about to be uploaded.
MIN_VERSIONS_FOR_CLEANUP = 2


class OldVersionCleanup:
    """Deletes all but the newest of a set of remote versions.

    Args:
        storage: Storage client providing ``delete(key)``
        log: Logger receiving one line per deleted key
    """

    def __init__(self, storage, log=None):
        self.storage = storage
        self.log = log or get_logger(__name__)

    @staticmethod
    def newest_first(candidates: Sequence[RemoteObject]) -> List[RemoteObject]:
        # sorted() is stable with reverse=True, equal timestamps keep listing order
        return sorted(candidates, key=lambda obj: obj.last_modified, reverse=True)

    def cleanup(self, candidates: Sequence[RemoteObject]) -> List[str]:
        """Delete every candidate except the newest.

        Deletes are issued one at a time, in newest-to-oldest order.

        Args:
            candidates: Objects already filtered to one prefix and extension

        Returns:
            Keys that were deleted
        """
        ordered = self.newest_first(candidates)
        if not ordered:
            return []

        self.log.debug("Keeping newest version %s", ordered[0].name)

        deleted = []
        for obj in ordered[1:]:
            self.log.info("Delete %s", obj.name)
            self.storage.delete(obj.name)
            deleted.append(obj.name)
        return deleted
