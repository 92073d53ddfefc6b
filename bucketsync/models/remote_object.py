"""
Remote object model (one entry of a bucket listing)
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class RemoteObject:
    """Read-only projection of an object returned by a bucket listing."""

    name: str
    last_modified: datetime
    size: Optional[int] = None

    @classmethod
    def from_listing(cls, entry):
        """Build from a ``list_objects_v2`` ``Contents`` entry."""
        return cls(
            name=entry["Key"],
            last_modified=entry["LastModified"],
            size=entry.get("Size"),
        )
