"""Handler for the 'sync' subcommand.

Usage:
    bucketsync sync -b my-bucket -r us-west-2 -d dist --remove-old-version --same-name-skip
"""
import time

from colorama import Fore, Style

from ..errors import BucketSyncError, ConfigError
from ..models.options import BehaviorOptions, UploadOptions
from ..utils.exception_matcher import compile_patterns
from .base_handler import ModeHandler


class SyncHandler(ModeHandler):
    """Handles ``bucketsync sync`` — versioned upload of a directory."""

    # ── Template-method steps ──────────────────────────────────────────

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Sync{Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        return self._require_bucket_and_region() and self._require_local_dir()

    def prepare_context(self):
        try:
            exceptions = compile_patterns(self.config.get('exceptions') or [])
        except ConfigError as e:
            print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
            return None

        dry_run = bool(getattr(self.args, 'dry_run', False))
        storage = self._create_storage(dry_run=dry_run)
        if storage is None:
            return None

        return {
            'storage': storage,
            'exceptions': exceptions,
            'behavior': BehaviorOptions.from_config(self.config),
            'upload_options': UploadOptions.with_cache_control(self.config.get('cache_control')),
            'local_dir': self.config.get('local_dir') or '.',
            'prefix': self.config.get('prefix') or '',
            'separator': self.config.get('separator') or '.',
            'fail_fast': not self.config.get('continue_on_error', False),
            'manifest': self.config.get('manifest') or '',
        }

    def execute_workflow(self, context):
        from ..services.sync_engine import DirectorySync

        storage = context['storage']
        behavior = context['behavior']
        print(f"  Bucket   : {Fore.WHITE}{storage.bucket_name}{Style.RESET_ALL}")
        print(f"  Source   : {context['local_dir']}")
        print(f"  Behavior : force={behavior.force} "
              f"remove_old_version={behavior.remove_old_version} "
              f"same_name_skip={behavior.same_name_skip}\n")

        driver = DirectorySync(
            storage,
            behavior,
            exceptions=context['exceptions'],
            separator=context['separator'],
            fail_fast=context['fail_fast'],
        )

        try:
            report = driver.sync(context['local_dir'], context['prefix'], context['upload_options'])
            if context['manifest']:
                storage.upload_json(context['manifest'], {
                    'files': report.modified_files,
                    'generated_utc_ts': int(time.time()),
                })
        except BucketSyncError as e:
            print(f"\n{Fore.RED}[ERROR] Sync aborted: {e}{Style.RESET_ALL}")
            return None

        return report

    def is_success(self, result) -> bool:
        return result is not None and result.ok

    def display_completion(self, result):
        print(f"\n{Fore.CYAN}Summary:{Style.RESET_ALL}")
        print(f"  Uploaded : {len(result.modified_files)}")
        print(f"  Skipped  : {len(result.skipped)}")
        print(f"  Deleted  : {len(result.deleted)}")
        print(f"  Excluded : {len(result.excluded)}")

        if result.failures:
            print(f"\n{Fore.RED}[ERROR] {len(result.failures)} file(s) failed:{Style.RESET_ALL}")
            for outcome in result.failures:
                print(f"  • {outcome.local_path}: {outcome.error}")
            return

        print(f"\n{Fore.GREEN}[SUCCESS] Sync complete!{Style.RESET_ALL}\n")
