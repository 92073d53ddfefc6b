"""Logging setup for bucketsync.

Every module logs through a child of the ``bucketsync`` logger. The CLI
picks the level from ``--verbose`` / ``--quiet``; the boto3 stack stays at
WARNING unless ``--verbose`` is given, so per-file lines are not buried
under HTTP chatter.

Usage::

    from bucketsync.utils.logger import get_logger

    log = get_logger(__name__)
    log.info("Upload %s", key)
"""
import logging
import sys

from colorama import Fore, Style

__all__ = ["get_logger", "setup_logging", "log_sync_summary", "ColouredFormatter"]

ROOT_LOGGER_NAME = "bucketsync"

# Loggers of the S3 client stack
LIBRARY_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")

_LEVEL_COLOURS = {
    logging.DEBUG: Fore.WHITE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

_configured = False


class ColouredFormatter(logging.Formatter):
    """Prefix each message with a coloured ``[LEVEL]`` tag.

    Records from outside the ``bucketsync`` namespace also carry the
    logger name, so library warnings can be told apart from ours.
    """

    def format(self, record: logging.LogRecord) -> str:
        colour = _LEVEL_COLOURS.get(record.levelno, "")
        msg = super().format(record)
        if not record.name.startswith(ROOT_LOGGER_NAME):
            msg = f"{record.name}: {msg}"
        return f"{colour}[{record.levelname}]{Style.RESET_ALL} {msg}"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the ``bucketsync`` logger and the S3 client loggers.

    Safe to call again (the CLI does so after parsing flags); the single
    stderr handler is reused and only levels change.

    Args:
        verbose: DEBUG for bucketsync, INFO for the boto3 stack
        quiet: WARNING only; wins over *verbose*
    """
    global _configured  # noqa: PLW0603

    level = _level_for(verbose, quiet)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColouredFormatter("%(message)s"))
        root.addHandler(handler)
    handler = root.handlers[0]
    handler.setLevel(level)

    library_level = logging.INFO if verbose and not quiet else logging.WARNING
    for name in LIBRARY_LOGGERS:
        library = logging.getLogger(name)
        library.setLevel(library_level)
        if handler not in library.handlers:
            library.addHandler(handler)
        library.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``bucketsync`` namespace.

    Applies the default INFO setup on first use if the CLI has not
    configured logging yet.
    """
    if not _configured:
        setup_logging()

    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def log_sync_summary(log: logging.Logger, local_dir: str, report) -> None:
    """Emit one record summarising a finished directory sync.

    Logged at WARNING when any file failed so it still shows with
    ``--quiet``.
    """
    level = logging.WARNING if report.failures else logging.INFO
    log.log(
        level,
        "Synced %s: %d uploaded, %d skipped, %d deleted, %d excluded, %d failed",
        local_dir, len(report.modified_files), len(report.skipped),
        len(report.deleted), len(report.excluded), len(report.failures),
    )
