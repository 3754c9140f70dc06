# codehunt/storage/file_store.py
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from codehunt.storage.base import StateStore, StorageError


class JsonFileStore(StateStore):
    """Stores every slice in a single JSON object on disk.

    The file maps ``"<namespace>:<key>"`` to the slice blob. Writes go through a
    temporary file that replaces the original, so a crash never leaves half a
    document behind.
    """

    def __init__(self, path: Path, namespace: str = "default"):
        super().__init__(namespace)
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read state file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"State file {self.path} is not a JSON object; ignoring it.")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Failed to write state file {self.path}: {e}")
            raise StorageError(f"Could not write {self.path}") from e

    def load(self, key: str) -> Optional[str]:
        return self._read_all().get(self.scoped(key))

    def save(self, key: str, blob: str) -> None:
        data = self._read_all()
        data[self.scoped(key)] = blob
        self._write_all(data)
        logger.debug(f"Saved slice {key!r} to {self.path}")

    def delete(self, key: str) -> None:
        data = self._read_all()
        if data.pop(self.scoped(key), None) is not None:
            self._write_all(data)
