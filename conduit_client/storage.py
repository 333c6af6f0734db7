"""Key-value storage backends for the persisted session token.

    MemoryStorage  - process-local dict (default; tests)
    FileStorage    - JSON file, survives restarts
    NullStorage    - non-interactive contexts: always absent, writes dropped

All implement KeyValueStoreProtocol. Removing an absent key is a no-op.
"""

import json
import os
from pathlib import Path
from typing import Dict, Optional, Union

from conduit_client.protocols import KeyValueStoreProtocol, LoggerProtocol
from conduit_client.settings import Settings
from conduit_client.utils.logging import get_component_logger


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class NullStorage:
    """Storage stub: authentication is always anonymous after restart."""

    def get(self, key: str) -> Optional[str]:
        return None

    def set(self, key: str, value: str) -> None:
        pass

    def remove(self, key: str) -> None:
        pass


class FileStorage:
    """JSON-object file; every write rewrites the file atomically."""

    def __init__(
        self,
        path: Union[str, Path],
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._path = Path(path)
        self._logger = get_component_logger("FileStorage", logger)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            self._logger.warning("storage_file_corrupt", path=str(self._path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self._path)

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._save(data)


def create_storage(
    settings: Settings,
    logger: Optional[LoggerProtocol] = None,
) -> KeyValueStoreProtocol:
    """Build the backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "file":
        return FileStorage(settings.storage_path, logger=logger)
    if settings.storage_backend == "null":
        return NullStorage()
    return MemoryStorage()


__all__ = ["MemoryStorage", "NullStorage", "FileStorage", "create_storage"]
