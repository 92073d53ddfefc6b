"""Handler for the 'force' subcommand.

Usage:
    bucketsync force -b my-bucket -r us-west-2 -d dist --yes
"""
from colorama import Fore, Style

from ..errors import BucketSyncError
from .base_handler import ModeHandler


class ForceHandler(ModeHandler):
    """Handles ``bucketsync force`` — empty the bucket, then upload everything."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Force Upload{Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        return self._require_bucket_and_region() and self._require_local_dir()

    def prepare_context(self):
        if not getattr(self.args, 'yes', False):
            bucket = self.config['bucket']
            print(f"{Fore.YELLOW}[WARNING] Every object in '{bucket}' will be deleted.{Style.RESET_ALL}")
            response = input(f"{Fore.CYAN}Type the bucket name to continue: {Style.RESET_ALL}").strip()
            if response != bucket:
                print(f"{Fore.YELLOW}[INFO] Aborted{Style.RESET_ALL}")
                return None

        storage = self._create_storage(dry_run=bool(getattr(self.args, 'dry_run', False)))
        if storage is None:
            return None

        return {
            'storage': storage,
            'local_dir': self.config.get('local_dir') or '.',
            'prefix': self.config.get('prefix') or '',
        }

    def execute_workflow(self, context):
        from ..services.force_client import ForceUploader

        uploader = ForceUploader(context['storage'])
        try:
            deleted = uploader.clear_bucket()
            uploaded = uploader.upload(context['local_dir'], context['prefix'])
        except BucketSyncError as e:
            print(f"\n{Fore.RED}[ERROR] Force upload aborted: {e}{Style.RESET_ALL}")
            return None

        return {'deleted': deleted, 'uploaded': uploaded}

    def is_success(self, result) -> bool:
        return result is not None

    def display_completion(self, result):
        print(f"\n{Fore.CYAN}Summary:{Style.RESET_ALL}")
        print(f"  Deleted  : {len(result['deleted'])}")
        print(f"  Uploaded : {len(result['uploaded'])}")
        print(f"\n{Fore.GREEN}[SUCCESS] Upload complete!{Style.RESET_ALL}\n")
