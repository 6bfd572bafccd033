import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self._store: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def remove(self, key: str) -> None:
        self._store.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._store)


class JsonFileStorage(MemoryStorage):
    """String key/value store kept in a single JSON file.

    The file is read once when the storage is opened and rewritten on every
    mutation, so a value is durable as soon as ``set``/``remove`` returns.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        super().__init__(self._read())

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self._path)
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._store, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self._path)

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._write()

    def remove(self, key: str) -> None:
        if key in self._store:
            super().remove(key)
            self._write()
