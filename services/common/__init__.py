"""
Common utilities and configurations for the contact manager services.
"""

from services.common.database_config import (
    create_service_async_engine,
    get_async_database_url,
)

__all__ = [
    "create_service_async_engine",
    "get_async_database_url",
]
