"""Mode handlers for the bucketsync CLI.

Subcommand handlers:
  - SyncHandler   → bucketsync sync
  - ForceHandler  → bucketsync force
"""
from .base_handler import ModeHandler
from .sync_handler import SyncHandler
from .force_handler import ForceHandler

__all__ = [
    'ModeHandler',
    'SyncHandler',
    'ForceHandler',
]
