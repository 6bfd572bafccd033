import json
import logging
from typing import Iterable

from models.country import Country
from models.identity import Identity
from services.storage_service import KeyValueStorage

logger = logging.getLogger(__name__)


class FavoritesStore:
    """Favorite country codes of the current identity.

    Storage is read only in ``on_identity_changed``; toggles write the whole
    list back under ``favorites_<id>`` and never re-read it.
    """

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage
        self._identity: Identity | None = None
        # dict keeps insertion order, which is the persisted order
        self._codes: dict[str, None] = {}

    @property
    def favorites(self) -> list[str]:
        return list(self._codes)

    def on_identity_changed(self, identity: Identity | None) -> None:
        self._identity = identity
        self._codes = {}
        if identity is None:
            return
        self._codes = dict.fromkeys(self._read(identity.favorites_key))

    def _read(self, key: str) -> list[str]:
        raw = self._storage.get(key)
        if not raw:
            return []
        try:
            codes = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable favorites under %s", key)
            return []
        if not isinstance(codes, list):
            logger.warning("Ignoring favorites under %s: not a list", key)
            return []
        return [c for c in codes if isinstance(c, str)]

    def is_favorite(self, code: str) -> bool:
        return self._identity is not None and code in self._codes

    def toggle_favorite(self, code: str) -> None:
        if self._identity is None:
            return

        codes = dict(self._codes)
        if code in codes:
            del codes[code]
        else:
            codes[code] = None

        self._storage.set(self._identity.favorites_key, json.dumps(list(codes)))
        self._codes = codes

    def get_favorite_countries(self, countries: Iterable[Country]) -> list[Country]:
        if self._identity is None or not self._codes:
            return []
        return [c for c in countries if c.cca3 in self._codes]
