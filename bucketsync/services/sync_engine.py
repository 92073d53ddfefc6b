"""
Directory synchronization driver.

Walks a local directory tree, maps each file to an object key and runs the
upload policy on it, one file at a time in directory-listing order.
"""
import os
import posixpath
from typing import Optional

from ..errors import BucketSyncError, ReadError
from ..models.options import BehaviorOptions, UploadOptions
from ..models.report import FileOutcome, SyncReport
from ..utils.exception_matcher import compile_patterns, is_exception
from ..utils.filename_parser import DEFAULT_FINGERPRINT_SEPARATOR
from ..utils.logger import get_logger, log_sync_summary
from .policy import UploadPolicy


def build_remote_key(remote_prefix: str, name: str) -> str:
    """Join a remote prefix and an entry name into an object key.

    A single leading ``/`` is stripped so an empty prefix maps files to the
    bucket root.
    """
    key = posixpath.join(remote_prefix, name) if remote_prefix else f"/{name}"
    if key.startswith('/'):
        key = key[1:]
    return key


class DirectorySync:
    """Synchronizes a local tree into a bucket.

    With ``fail_fast`` (the default) the first error aborts the whole run.
    Without it each file is isolated: failures are logged, recorded in
    :attr:`SyncReport.failures` and the walk continues.

    Args:
        storage: Storage client
        behavior: BehaviorOptions for the run
        exceptions: Exclusion patterns (strings or compiled)
        separator: Separator between filename prefix and fingerprint
        fail_fast: Abort on the first error
        log: Logger for progress output
    """

    def __init__(self, storage, behavior: Optional[BehaviorOptions] = None,
                 exceptions=(), separator: str = DEFAULT_FINGERPRINT_SEPARATOR,
                 fail_fast: bool = True, log=None):
        self.log = log or get_logger(__name__)
        self.storage = storage
        self.exceptions = compile_patterns(exceptions)
        self.fail_fast = fail_fast
        self.policy = UploadPolicy(storage, behavior, separator=separator, log=self.log)

    def sync(self, local_dir: str, remote_prefix: str = "",
             upload_options: Optional[UploadOptions] = None) -> SyncReport:
        """Upload *local_dir* under *remote_prefix*.

        Args:
            local_dir: Local directory to walk
            remote_prefix: Key prefix the tree is mapped under
            upload_options: Header options applied to every upload

        Returns:
            SyncReport; ``modified_files`` lists the uploaded keys

        Raises:
            ReadError: If a directory cannot be listed (fail-fast only)
            TransportError: If a remote operation fails (fail-fast only)
        """
        report = SyncReport()
        self._sync_dir(local_dir, remote_prefix, upload_options, report)
        log_sync_summary(self.log, local_dir, report)
        return report

    def _sync_dir(self, local_dir, remote_prefix, upload_options, report):
        try:
            names = os.listdir(local_dir)
        except OSError as e:
            self._handle_failure(
                FileOutcome(key=remote_prefix, local_path=local_dir), ReadError(local_dir, e), report
            )
            return

        for name in names:
            local_path = os.path.join(local_dir, name)

            if os.path.isdir(local_path):
                if os.path.islink(local_path):
                    self.log.warning("Skipping symlinked directory %s", local_path)
                    continue
                self._sync_dir(local_path, posixpath.join(remote_prefix, name),
                               upload_options, report)
                continue

            if is_exception(name, self.exceptions):
                self.log.info("Exception %s", local_path)
                report.record_excluded(local_path)
                continue

            key = build_remote_key(remote_prefix, name)
            try:
                outcome = self.policy.process(key, local_path, upload_options)
            except BucketSyncError as e:
                self._handle_failure(FileOutcome(key=key, local_path=local_path), e, report)
                continue
            report.record(outcome)

    def _handle_failure(self, outcome, error, report):
        if self.fail_fast:
            raise error
        outcome.error = error
        self.log.error("%s", error)
        report.record(outcome)
