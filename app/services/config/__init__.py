"""Configuration package (Facade).

Re-exports the public config types so callers import from a single, stable path:

	from app.services.config import AppConfig, StorageConfig
"""

from app.services.config.app_config import AppConfig
from app.services.config.storage_config import StorageConfig, StorageResourceNames

__all__ = ["AppConfig", "StorageConfig", "StorageResourceNames"]
