"""
Upload decisions and per-run sync reports
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .options import UploadOptions
from .remote_object import RemoteObject


class Action(Enum):
    """What the upload policy decided to do with a file."""

    UPLOAD = "upload"
    SKIP = "skip"
    REPLACE_THEN_UPLOAD = "replace_then_upload"


@dataclass
class UploadDecision:
    """Outcome of the upload policy for a single key, before it is applied."""

    action: Action
    key: str
    local_path: str
    options: Optional[UploadOptions] = None
    stale_versions: List[RemoteObject] = field(default_factory=list)
    reason: str = ""


@dataclass
class FileOutcome:
    """What actually happened to one file during a run."""

    key: str
    local_path: str
    action: Optional[Action] = None
    uploaded: bool = False
    deleted: List[str] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class SyncReport:
    """
    Aggregated result of one directory sync.

    ``modified_files`` lists the keys uploaded during the run, in the order
    they were uploaded.
    """

    modified_files: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    failures: List[FileOutcome] = field(default_factory=list)
    outcomes: List[FileOutcome] = field(default_factory=list)

    def record(self, outcome: FileOutcome):
        """Fold one file outcome into the report."""
        self.outcomes.append(outcome)
        if outcome.failed:
            self.failures.append(outcome)
            return
        self.deleted.extend(outcome.deleted)
        if outcome.uploaded:
            self.modified_files.append(outcome.key)
        elif outcome.action is Action.SKIP:
            self.skipped.append(outcome.key)

    def record_excluded(self, local_path: str):
        self.excluded.append(local_path)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self):
        """Serialize to dictionary"""
        return {
            "modified_files": list(self.modified_files),
            "skipped": list(self.skipped),
            "deleted": list(self.deleted),
            "excluded": list(self.excluded),
            "failures": [
                {"key": f.key, "local_path": f.local_path, "error": str(f.error)}
                for f in self.failures
            ],
        }
