import logging
from typing import Callable

from pydantic import ValidationError

from models.identity import Identity
from services.storage_service import KeyValueStorage

logger = logging.getLogger(__name__)

USER_KEY = "user"

IdentityListener = Callable[[Identity | None], None]


class IdentityContext:
    """Holds the signed-in identity and persists it under the ``user`` key.

    The persisted identity is restored in the constructor, before any
    listener can be registered.
    """

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage
        self._listeners: list[IdentityListener] = []
        self._current: Identity | None = self._restore()

    def _restore(self) -> Identity | None:
        raw = self._storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return Identity.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring unreadable stored identity: %s", e)
            return None

    @property
    def current_identity(self) -> Identity | None:
        return self._current

    def on_change(self, listener: IdentityListener) -> None:
        """Register a listener and call it right away with the current identity."""
        self._listeners.append(listener)
        listener(self._current)

    def _set(self, identity: Identity | None) -> None:
        self._current = identity
        for listener in self._listeners:
            listener(identity)

    def login(self, identity: Identity) -> None:
        self._storage.set(USER_KEY, identity.model_dump_json())
        logger.info("Signed in as %s", identity.id)
        self._set(identity)

    # Registration and login have the same effect on the session
    register = login

    def logout(self) -> None:
        self._storage.remove(USER_KEY)
        if self._current is not None:
            logger.info("Signed out %s", self._current.id)
        self._set(None)
