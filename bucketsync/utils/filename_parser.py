"""
Filename parsing for fingerprinted build artifacts.

Bundlers emit filenames such as ``app.a1b2c3.js`` or
``vendor.a1b2c3.bundle.js`` where the middle segment is a content hash.
Splitting that segment out lets different builds of the same file be
recognised as versions of one another.
"""
from ..models.filename_info import FilenameInfo

EXTENSION_SEPARATOR = "."
DEFAULT_FINGERPRINT_SEPARATOR = "."

# Infix emitted by webpack-style bundles after the hash (vendor.<hash>.bundle.js)
BUNDLE_MARKER = ".bundle"


def _extension_of(filename: str) -> str:
    # rfind returns -1 when there is no dot, so the whole name is returned
    return filename[filename.rfind(EXTENSION_SEPARATOR) + 1:]


def parse_filename(filename: str, separator: str = DEFAULT_FINGERPRINT_SEPARATOR) -> FilenameInfo:
    """
    Split a filename (or object key) into prefix, fingerprint and extension.

    Args:
        filename: Filename or full object key
        separator: Character separating the prefix from the fingerprint

    Returns:
        FilenameInfo

    Example:
        >>> parse_filename("app.a1b2c3.js").prefix
        'app'
        >>> parse_filename("vendor.a1b2c3.bundle.js").fingerprint
        'a1b2c3'
    """
    extension = _extension_of(filename)

    if separator not in filename:
        return FilenameInfo(prefix=filename, fingerprint="", extension=extension, filename=filename)

    dot = filename.rfind(EXTENSION_SEPARATOR)
    stem = filename[:dot] if dot >= 0 else filename

    if BUNDLE_MARKER in stem:
        stem = stem[:stem.rfind(BUNDLE_MARKER)]

    if separator in stem:
        cut = stem.rfind(separator)
        prefix = stem[:cut]
        fingerprint = stem[cut + len(separator):]
    else:
        prefix = stem
        fingerprint = ""

    return FilenameInfo(prefix=prefix, fingerprint=fingerprint, extension=extension, filename=filename)
