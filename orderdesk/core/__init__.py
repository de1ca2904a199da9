"""
OrderDesk Core
==============

Core utilities and shared functionality for OrderDesk modules.
"""

from .config import Config, get_config_value
from .content_store import ContentStoreClient, ContentStoreError
from .database import Database
from .images import image_url
from .logging_service import LoggingService, logger

__all__ = [
    'Config', 'get_config_value', 'ContentStoreClient', 'ContentStoreError',
    'Database', 'image_url', 'LoggingService', 'logger',
]
