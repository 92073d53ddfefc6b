"""AWS utilities for session management.

This module builds the boto3 session and S3 client used by the storage
layer. Aliyun OSS, MinIO and other S3-compatible services are reached by
passing their endpoint URL.
"""
from typing import Optional

from colorama import Fore, Style

from ..credentials import resolve_credentials


def _import_boto3():
    """Lazily import boto3, raising a helpful error if not installed."""
    try:
        import boto3
        return boto3
    except ImportError:
        print(f"{Fore.RED}[ERROR] boto3 is required but is not installed.{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}Install it with: pip install bucketsync{Style.RESET_ALL}")
        raise


def create_boto3_session(
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
    access_key_id: Optional[str] = None,
    access_key_secret: Optional[str] = None,
):
    """Create a boto3 session from explicit keys or a named profile.

    Explicit keys win over *profile_name*. With neither, boto3 falls back to
    its default credential chain (environment, shared config, instance role).

    Args:
        region_name: Bucket region
        profile_name: AWS CLI profile name
        access_key_id: Explicit access key id
        access_key_secret: Explicit access key secret

    Returns:
        boto3.Session object

    Example:
        >>> session = create_boto3_session('us-west-2', profile_name='deploy')
        >>> s3 = session.client('s3')
    """
    boto3 = _import_boto3()
    if access_key_id and access_key_secret:
        return boto3.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=access_key_secret,
            region_name=region_name,
        )
    return boto3.Session(profile_name=profile_name, region_name=region_name)


def create_s3_client(config: dict):
    """Build an S3 client from a merged configuration dictionary.

    Reads ``region``, ``endpoint_url``, ``profile``, ``access_key_id``,
    ``access_key_secret`` and ``access_key_file``.

    Raises:
        MalformedAccessCredentials: If a key file is configured but unusable
    """
    credentials = resolve_credentials(
        access_key_id=config.get('access_key_id'),
        access_key_secret=config.get('access_key_secret'),
        access_key_file=config.get('access_key_file'),
    )
    session = create_boto3_session(
        region_name=config.get('region') or None,
        profile_name=config.get('profile') or None,
        access_key_id=credentials.get('access_key_id'),
        access_key_secret=credentials.get('access_key_secret'),
    )

    client_kwargs = {}
    if config.get('endpoint_url'):
        client_kwargs['endpoint_url'] = config['endpoint_url']
    return session.client('s3', **client_kwargs)
