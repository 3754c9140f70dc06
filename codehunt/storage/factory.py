from loguru import logger

from codehunt.config.settings import AppSettings
from codehunt.models.enums import StorageBackend
from codehunt.storage.base import MemoryStore, StateStore
from codehunt.storage.file_store import JsonFileStore


def build_store(settings: AppSettings) -> StateStore:
    """Instantiates the storage backend named in the settings."""
    backend = settings.storage_backend
    logger.debug(f"Using {backend.value} storage (namespace={settings.storage_namespace})")

    if backend == StorageBackend.MEMORY:
        return MemoryStore(settings.storage_namespace)
    if backend == StorageBackend.SUPABASE:
        # Imported lazily so the supabase client is only built when asked for
        from codehunt.storage.supabase_store import SupabaseStore

        return SupabaseStore.from_settings(settings)
    return JsonFileStore(settings.state_file, settings.storage_namespace)
