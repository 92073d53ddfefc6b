"""
Parsed filename model
"""
from dataclasses import dataclass

# Fingerprint value produced by ``name.min.js`` style filenames. It marks a
# minified artifact, not a content hash.
MINIFIED_SENTINEL = "min"


@dataclass(frozen=True)
class FilenameInfo:
    """
    A filename split into its stable prefix, embedded fingerprint and
    extension.

    ``app.a1b2c3.js`` parses to prefix ``app``, fingerprint ``a1b2c3`` and
    extension ``js``.
    """

    prefix: str
    fingerprint: str
    extension: str
    filename: str

    @property
    def has_fingerprint(self) -> bool:
        """True when the filename carries a real content hash."""
        return bool(self.fingerprint) and self.fingerprint != MINIFIED_SENTINEL

    def same_family(self, other: "FilenameInfo") -> bool:
        """True when *other* is another version of the same file."""
        return self.prefix == other.prefix and self.extension == other.extension
