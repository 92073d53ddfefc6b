"""
Upload policy engine.

Decides, per object key, whether a local file is uploaded, skipped, or
uploaded after older versions of it are removed from the bucket. The
decision is driven by the fingerprint embedded in the filename and the
bucket listing for the file's prefix.
"""
from typing import Optional

from ..models.filename_info import FilenameInfo
from ..models.options import BehaviorOptions, CACHE_CONTROL, UploadOptions
from ..models.report import Action, FileOutcome, UploadDecision
from ..utils.filename_parser import DEFAULT_FINGERPRINT_SEPARATOR, parse_filename
from ..utils.logger import get_logger
from .cleanup import MIN_VERSIONS_FOR_CLEANUP, OldVersionCleanup

# Entry points must never be served from a stale cache
NO_CACHE_EXTENSIONS = ('html',)


class UploadPolicy:
    """Per-file upload decisions for one sync invocation.

    Args:
        storage: Storage client (``put``, ``list``, ``delete``)
        behavior: BehaviorOptions for the run
        separator: Separator between filename prefix and fingerprint
        log: Logger for decision output
    """

    def __init__(self, storage, behavior: Optional[BehaviorOptions] = None,
                 separator: str = DEFAULT_FINGERPRINT_SEPARATOR, log=None):
        self.storage = storage
        self.behavior = behavior or BehaviorOptions()
        self.separator = separator
        self.log = log or get_logger(__name__)
        self.cleaner = OldVersionCleanup(storage, log=self.log)

    def parse(self, key: str) -> FilenameInfo:
        return parse_filename(key, self.separator)

    # ── Decision ───────────────────────────────────────────────────────

    def decide(self, key: str, local_path: str,
               upload_options: Optional[UploadOptions] = None) -> UploadDecision:
        """Decide what to do with *key* without changing the bucket.

        May list the bucket; never uploads or deletes.

        Args:
            key: Destination object key
            local_path: Local file path
            upload_options: Header options requested by the caller

        Returns:
            UploadDecision

        Raises:
            TransportError: If the bucket listing fails
        """
        info = self.parse(key)
        options = upload_options.copy() if upload_options else UploadOptions()

        # Content without a stable hash in its name must not be long-cached
        if not info.has_fingerprint and options.has_header(CACHE_CONTROL):
            options = options.without_header(CACHE_CONTROL)

        if info.extension in NO_CACHE_EXTENSIONS:
            return UploadDecision(Action.UPLOAD, key, local_path,
                                  options=UploadOptions.no_cache(),
                                  reason=f"{info.extension} is always uploaded uncached")

        if self.behavior.force:
            return UploadDecision(Action.UPLOAD, key, local_path,
                                  options=options, reason="forced")

        listed = self.storage.list(info.prefix)

        if self.behavior.same_name_skip and any(obj.name == key for obj in listed):
            return UploadDecision(Action.SKIP, key, local_path,
                                  reason="same name exists remotely")

        if self.behavior.remove_old_version:
            versions = [obj for obj in listed if self.parse(obj.name).same_family(info)]
            if len(versions) >= MIN_VERSIONS_FOR_CLEANUP:
                return UploadDecision(Action.REPLACE_THEN_UPLOAD, key, local_path,
                                      options=options, stale_versions=versions,
                                      reason=f"{len(versions)} remote version(s)")

        return UploadDecision(Action.UPLOAD, key, local_path, options=options)

    # ── Execution ──────────────────────────────────────────────────────

    def apply(self, decision: UploadDecision) -> FileOutcome:
        """Carry out a decision returned by :meth:`decide`.

        Raises:
            ReadError: If the local file cannot be read
            TransportError: If a delete or the upload fails
        """
        outcome = FileOutcome(key=decision.key, local_path=decision.local_path,
                              action=decision.action)

        if decision.action is Action.SKIP:
            self.log.info("Remote exists %s, skipping", decision.key)
            return outcome

        if decision.action is Action.REPLACE_THEN_UPLOAD:
            outcome.deleted = self.cleaner.cleanup(decision.stale_versions)

        self.storage.put(decision.key, decision.local_path, decision.options)
        outcome.uploaded = True
        self.log.info("Upload %s", decision.key)
        return outcome

    def process(self, key: str, local_path: str,
                upload_options: Optional[UploadOptions] = None) -> FileOutcome:
        """Decide and apply in one step."""
        decision = self.decide(key, local_path, upload_options)
        self.log.debug("%s -> %s %s", key, decision.action.value, decision.reason)
        return self.apply(decision)
