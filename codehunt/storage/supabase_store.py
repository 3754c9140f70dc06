# codehunt/storage/supabase_store.py
from typing import Any, Dict, Optional

import httpx
from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from supabase import Client, create_client
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from codehunt.config.settings import AppSettings
from codehunt.storage.base import StateStore, StorageError

# Transport failures and PostgREST errors are worth another attempt
RETRYABLE_ERRORS = (httpx.TransportError, APIError)


class SupabaseStore(StateStore):
    """Keeps state slices as rows of a Supabase table.

    Expected table layout::

        create table hunt_state (
            namespace text not null,
            key text not null,
            value text not null,
            primary key (namespace, key)
        );
    """

    def __init__(self, client: Client, table: str = "hunt_state", namespace: str = "default"):
        super().__init__(namespace)
        self.client = client
        self.table = table

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "SupabaseStore":
        if not settings.supabase_url or not settings.supabase_key:
            logger.critical("Supabase URL or Key not configured in settings.")
            raise StorageError("Supabase configuration missing.")

        key_snippet = f"{settings.supabase_key[:5]}...{settings.supabase_key[-5:]}"
        logger.debug(
            f"Initializing Supabase client for {settings.supabase_url} (key {key_snippet})"
        )
        client = create_client(settings.supabase_url, settings.supabase_key)
        logger.success("Supabase client initialized successfully.")
        return cls(client, settings.supabase_table, settings.storage_namespace)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        reraise=True,
    )
    def _fetch(self, key: str) -> APIResponse:
        return (
            self.client.table(self.table)
            .select("value")
            .eq("namespace", self.namespace)
            .eq("key", key)
            .limit(1)
            .execute()
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        reraise=True,
    )
    def _upsert(self, row: Dict[str, Any]) -> APIResponse:
        return (
            self.client.table(self.table)
            .upsert(row, on_conflict="namespace,key")
            .execute()
        )

    def load(self, key: str) -> Optional[str]:
        try:
            response = self._fetch(key)
        except APIError as e:
            logger.error(f"Supabase API error loading slice {key!r}: {e.message}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Network error loading slice {key!r} from Supabase: {e}")
            return None

        rows = response.data or []
        if not rows:
            return None
        value = rows[0].get("value")
        return value if isinstance(value, str) else None

    def save(self, key: str, blob: str) -> None:
        row = {"namespace": self.namespace, "key": key, "value": blob}
        try:
            self._upsert(row)
        except APIError as e:
            logger.error(f"Supabase API error saving slice {key!r}: {e.message}")
            raise StorageError(f"Could not save {key!r} to Supabase") from e
        except httpx.HTTPError as e:
            logger.error(f"Network error saving slice {key!r} to Supabase: {e}")
            raise StorageError(f"Could not save {key!r} to Supabase") from e
        logger.debug(f"Upserted slice {key!r} to {self.table}")

    def delete(self, key: str) -> None:
        try:
            (
                self.client.table(self.table)
                .delete()
                .eq("namespace", self.namespace)
                .eq("key", key)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Failed to delete slice {key!r} from Supabase: {e}")
            raise StorageError(f"Could not delete {key!r} from Supabase") from e
