"""Base mode handler with template method pattern."""
import os
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from colorama import Fore, Style


class ModeHandler(ABC):
    """Abstract base class for all subcommand handlers."""

    def __init__(self, app, args=None):
        """Initialize mode handler with the CLI application instance.

        Args:
            app: Main BucketSync CLI instance carrying the merged config
            args: Parsed argparse namespace
        """
        self.app = app
        self.config = app.config
        self.args = args

    def execute(self) -> int:
        """Execute mode workflow (Template Method).

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        self.display_banner()

        if not self.validate_prerequisites():
            return 1

        context = self.prepare_context()
        if context is None:
            return 1

        result = self.execute_workflow(context)

        if result:
            self.display_completion(result)

        return 0 if self.is_success(result) else 1

    @abstractmethod
    def display_banner(self):
        """Display mode-specific banner."""
        pass

    @abstractmethod
    def validate_prerequisites(self) -> bool:
        """Validate prerequisites for this mode.

        Returns:
            True if prerequisites are met, False otherwise
        """
        pass

    @abstractmethod
    def prepare_context(self) -> Optional[Dict[str, Any]]:
        """Prepare execution context.

        Returns:
            Context dictionary with required data, or None if preparation failed
        """
        pass

    @abstractmethod
    def execute_workflow(self, context: Dict[str, Any]) -> Any:
        """Execute mode-specific workflow.

        Args:
            context: Prepared context dictionary

        Returns:
            Result object (mode-specific), or None/False if failed
        """
        pass

    def is_success(self, result: Any) -> bool:
        """Map the workflow result to success. Override for richer results."""
        return bool(result)

    def display_completion(self, result: Any):
        """Display completion message.

        Args:
            result: Result from execute_workflow
        """
        print(f"\n{Fore.GREEN}[SUCCESS] Done!{Style.RESET_ALL}\n")

    # ── Shared prerequisite checks ─────────────────────────────────────

    def _require_bucket_and_region(self) -> bool:
        missing = [name for name in ('bucket', 'region') if not self.config.get(name)]
        if missing:
            print(f"{Fore.RED}[ERROR] Missing required setting(s): {', '.join(missing)}{Style.RESET_ALL}")
            print(f"{Fore.YELLOW}[TIP] Pass --{missing[0]} or set it with: "
                  f"bucketsync --config '{{\"{missing[0]}\": \"...\"}}'{Style.RESET_ALL}")
            return False
        return True

    def _require_local_dir(self) -> bool:
        local_dir = self.config.get('local_dir') or '.'
        if not os.path.isdir(local_dir):
            print(f"{Fore.RED}[ERROR] Local directory not found: {local_dir}{Style.RESET_ALL}")
            return False
        return True

    def _create_storage(self, dry_run=False):
        """Build the storage client, reporting credential problems.

        Returns:
            StorageOperations, or None when credentials are unusable
        """
        from ..errors import MalformedAccessCredentials
        from ..services.storage import StorageOperations

        try:
            return StorageOperations.from_config(self.config, dry_run=dry_run)
        except MalformedAccessCredentials as e:
            print(f"{Fore.YELLOW}[ERROR] {e}{Style.RESET_ALL}")
            return None
