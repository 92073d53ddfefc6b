"""
Per-run behavior toggles and per-upload header options
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

CACHE_CONTROL = "Cache-Control"
NO_CACHE = "no-cache"


@dataclass(frozen=True)
class BehaviorOptions:
    """
    Policy toggles for one sync invocation.

    Attributes:
        force: Upload every file without consulting the bucket listing
        remove_old_version: Delete older same-prefix versions before upload
        same_name_skip: Skip files whose exact key already exists remotely
    """

    force: bool = False
    remove_old_version: bool = False
    same_name_skip: bool = False

    @classmethod
    def from_config(cls, config):
        """Build from a configuration dictionary."""
        config = config or {}
        return cls(
            force=bool(config.get("force", False)),
            remove_old_version=bool(config.get("remove_old_version", False)),
            same_name_skip=bool(config.get("same_name_skip", False)),
        )


@dataclass
class UploadOptions:
    """
    Header map sent along with an upload.

    Header names are matched case-insensitively. Methods that change
    headers return a new instance and never touch the original.
    """

    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def with_cache_control(cls, value: Optional[str]):
        """Options carrying a single ``Cache-Control`` header (or none)."""
        return cls({CACHE_CONTROL: value} if value else {})

    @classmethod
    def no_cache(cls):
        return cls({CACHE_CONTROL: NO_CACHE})

    def copy(self):
        return UploadOptions(dict(self.headers))

    def get_header(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def has_header(self, name: str) -> bool:
        return self.get_header(name) is not None

    def without_header(self, name: str):
        """Return a copy with every spelling of *name* removed."""
        wanted = name.lower()
        return UploadOptions({k: v for k, v in self.headers.items() if k.lower() != wanted})

    @property
    def cache_control(self) -> Optional[str]:
        return self.get_header(CACHE_CONTROL)
