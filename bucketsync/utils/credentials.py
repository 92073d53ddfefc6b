"""
Access key loading.

Key files follow the CSV layout produced by the cloud console export:
a header line followed by ``AccessKeyId,AccessKeySecret``.
"""
from typing import Dict, Optional

from ..errors import MalformedAccessCredentials
from .logger import get_logger

log = get_logger(__name__)


def read_access_key(access_key_file_path: str) -> Dict[str, str]:
    """
    Read an access key pair from a console-exported CSV file.

    Args:
        access_key_file_path: Path to the key file

    Returns:
        Dictionary with ``access_key_id`` and ``access_key_secret``

    Raises:
        MalformedAccessCredentials: If the file is missing, unreadable or malformed
    """
    try:
        with open(access_key_file_path, 'r', encoding='utf-8-sig') as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise MalformedAccessCredentials(
            f"Cannot read access key file {access_key_file_path}: {e}"
        ) from e

    if len(lines) < 2:
        raise MalformedAccessCredentials(
            f"Access key file {access_key_file_path} has no key line"
        )

    fields = [part.strip() for part in lines[1].split(',')]
    if len(fields) < 2 or not fields[0] or not fields[1]:
        raise MalformedAccessCredentials(
            f"Access key file {access_key_file_path} is not in 'id,secret' form"
        )

    log.debug("Loaded access key %s... from %s", fields[0][:4], access_key_file_path)
    return {
        "access_key_id": fields[0],
        "access_key_secret": fields[1],
    }


def resolve_credentials(access_key_id: Optional[str] = None,
                        access_key_secret: Optional[str] = None,
                        access_key_file: Optional[str] = None) -> Dict[str, str]:
    """
    Pick credentials from explicit values or a key file.

    Returns an empty dictionary when neither is given so the caller can fall
    back to a named profile or the default credential chain.

    Raises:
        MalformedAccessCredentials: If only half of an explicit pair is given,
            or the key file cannot be used
    """
    if access_key_id or access_key_secret:
        if not (access_key_id and access_key_secret):
            raise MalformedAccessCredentials(
                "Both --access-key-id and --access-key-secret are required"
            )
        return {
            "access_key_id": access_key_id,
            "access_key_secret": access_key_secret,
        }

    if access_key_file:
        return read_access_key(access_key_file)

    return {}
