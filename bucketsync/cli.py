"""
bucketsync - Main CLI interface
Synchronize a local build directory to an object-storage bucket.

Subcommands:
  sync   versioned upload with cache-control and old-version cleanup
  force  empty the bucket, then upload everything
"""
import sys
import signal
import argparse
from colorama import init, Fore, Style

from . import __version__
from .errors import ConfigError
from .utils.config_loader import ConfigLoader, handle_config_update, merge_cli_overrides

# Initialize colorama
init(autoreset=True)

# ── Help-text epilogs for subcommands ──────────────────────────────────────

SYNC_EXAMPLES = """\
Examples:
  bucketsync sync -b my-site -r us-west-2 -d dist
  bucketsync sync -b my-site -r us-west-2 -d dist --remove-old-version --same-name-skip
  bucketsync sync -b my-site -r oss-cn-hangzhou -c AccessKey.csv \\
      --endpoint-url https://oss-cn-hangzhou.aliyuncs.com -d dist \\
      --cache-control "max-age=31536000" --exclude '\\.map$'

Filenames carrying a content hash (app.a1b2c3.js) keep the requested
Cache-Control header; other files are uploaded without it. *.html files are
always uploaded with Cache-Control: no-cache.
"""

FORCE_EXAMPLES = """\
Examples:
  bucketsync force -b my-site -r us-west-2 -d dist
  bucketsync force -b my-site -r us-west-2 -d dist --yes

Deletes every object in the bucket, then uploads the whole directory.
"""

# argparse dest -> config key
_OVERRIDE_KEYS = (
    'bucket', 'region', 'endpoint_url', 'profile',
    'access_key_id', 'access_key_secret', 'access_key_file',
    'local_dir', 'prefix', 'exceptions', 'cache_control', 'separator',
    'force', 'remove_old_version', 'same_name_skip', 'continue_on_error',
    'manifest',
)


class BucketSync:
    """Main CLI application class."""

    def __init__(self, config=None):
        """Initialize CLI application."""
        self.config = config or {}

        # Setup signal handler for graceful shutdown
        signal.signal(signal.SIGINT, self.signal_handler)

    def signal_handler(self, sig, frame):
        """Handle Ctrl+C. Uploads and deletes already sent are not rolled back."""
        print(f"\n\n{Fore.YELLOW}[INFO] Interrupted, shutting down...")
        sys.exit(130)


# ── Argument Parser ────────────────────────────────────────────────────────

def _add_connection_arguments(parser):
    parser.add_argument('-b', '--bucket', help='Target bucket')
    parser.add_argument('-r', '--region', help='Bucket region')
    parser.add_argument('-i', '--access-key-id', dest='access_key_id', help='Access key id')
    parser.add_argument('-s', '--access-key-secret', dest='access_key_secret',
                        help='Access key secret')
    parser.add_argument('-c', '--access-key-file', dest='access_key_file',
                        help='CSV key file (header line, then "id,secret")')
    parser.add_argument('--profile', help='AWS CLI profile to use instead of explicit keys')
    parser.add_argument('--endpoint-url', dest='endpoint_url',
                        help='S3-compatible endpoint (e.g. an OSS region endpoint)')
    parser.add_argument('-d', '--dir', dest='local_dir', help='Local directory to upload (default: .)')
    parser.add_argument('--prefix', help='Key prefix to upload under (default: bucket root)')
    parser.add_argument('--dry-run', action='store_true',
                        help='List the bucket but only log uploads and deletes')


def create_argument_parser():
    """Create and configure the subparser-based argument parser."""
    parser = argparse.ArgumentParser(
        prog='bucketsync',
        description='bucketsync — sync a local directory to an object-storage bucket',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', help='Update bucketsync.json with JSON string')

    # Shared parent so --verbose/--quiet work after the subcommand name too
    _output_parent = argparse.ArgumentParser(add_help=False)
    _output_parent.add_argument('--verbose', action='store_true', help='Enable verbose output')
    _output_parent.add_argument('--quiet', action='store_true', help='Only show warnings and errors')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ── sync ───────────────────────────────────────────────────────────
    sync_parser = subparsers.add_parser(
        'sync',
        parents=[_output_parent],
        help='Versioned upload with cache-control and old-version cleanup',
        description='Upload a directory, applying the fingerprint-based upload policy.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=SYNC_EXAMPLES,
    )
    _add_connection_arguments(sync_parser)
    sync_parser.add_argument('--exclude', dest='exceptions', action='append', default=[],
                             metavar='REGEX',
                             help='Do not upload files whose name matches REGEX (repeatable)')
    sync_parser.add_argument('--cache-control', dest='cache_control',
                             help='Cache-Control header for fingerprinted files')
    sync_parser.add_argument('--separator',
                             help='Separator between name and content hash (default: .)')
    sync_parser.add_argument('--force', action='store_true',
                             help='Upload every file without checking the bucket')
    sync_parser.add_argument('--remove-old-version', dest='remove_old_version',
                             action='store_true',
                             help='Delete older versions of a file, keeping the newest')
    sync_parser.add_argument('--same-name-skip', dest='same_name_skip', action='store_true',
                             help='Skip files whose exact key already exists')
    sync_parser.add_argument('--continue-on-error', dest='continue_on_error',
                             action='store_true',
                             help='Keep going after a failed file and report failures at the end')
    sync_parser.add_argument('--manifest', metavar='KEY',
                             help='Upload a JSON list of uploaded keys to KEY after the run')

    # ── force ──────────────────────────────────────────────────────────
    force_parser = subparsers.add_parser(
        'force',
        parents=[_output_parent],
        help='Empty the bucket, then upload all files',
        description='Delete every object in the bucket and upload the directory.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=FORCE_EXAMPLES,
    )
    _add_connection_arguments(force_parser)
    force_parser.add_argument('-y', '--yes', action='store_true',
                              help='Do not ask for confirmation')

    return parser


# ── Bootstrap Helper ───────────────────────────────────────────────────────

def _bootstrap(args):
    """Load config and overlay command-line values.

    Returns:
        Tuple of (BucketSync instance or None, exit_code_or_None).
    """
    try:
        config = ConfigLoader.load_config_json()
    except ConfigError as e:
        print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
        return None, 1

    overrides = {key: getattr(args, key, None) for key in _OVERRIDE_KEYS}
    if overrides.get('exceptions'):
        overrides['exceptions'] = list(config.get('exceptions') or []) + overrides['exceptions']

    return BucketSync(merge_cli_overrides(config, overrides)), None


# ── Main Entry Point ──────────────────────────────────────────────────────

def main(argv=None):
    """Main CLI entry point."""
    from .utils.logger import setup_logging

    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=getattr(args, 'verbose', False), quiet=getattr(args, 'quiet', False))

    # Handle --config (no bucket needed)
    if args.config:
        return handle_config_update(args.config)

    if args.command is None:
        parser.print_help()
        return 1

    app, exit_code = _bootstrap(args)
    if exit_code is not None:
        return exit_code

    from .modes.sync_handler import SyncHandler
    from .modes.force_handler import ForceHandler

    handlers = {
        'sync': lambda: SyncHandler(app, args),
        'force': lambda: ForceHandler(app, args),
    }

    handler_factory = handlers.get(args.command)
    if not handler_factory:
        parser.print_help()
        return 1

    return handler_factory().execute()


if __name__ == '__main__':
    sys.exit(main())
