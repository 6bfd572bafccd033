import asyncio
import logging
from typing import Callable

from models.country import Country
from models.state import Failed, Loaded, Loading, RemoteState
from utils.countries_client import CountryApi

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to fetch countries. Please try again later."

LoadedListener = Callable[[tuple[Country, ...]], None]


def dedupe_by_code(countries: list[Country]) -> tuple[Country, ...]:
    seen: set[str] = set()
    unique = []
    for country in countries:
        if country.cca3 in seen:
            logger.warning("Dropping duplicate country record %s", country.cca3)
            continue
        seen.add(country.cca3)
        unique.append(country)
    return tuple(unique)


class CountryRepository:
    """Loads the full country list once and serves it read-only.

    ``loading`` is true from construction until the single fetch-all settles.
    A failed load is final: there is no retry and no refresh.
    """

    def __init__(self, api: CountryApi):
        self._api = api
        self._state: RemoteState = Loading()
        self._task: asyncio.Task | None = None
        self._listeners: list[LoadedListener] = []

    @property
    def state(self) -> RemoteState:
        return self._state

    @property
    def countries(self) -> tuple[Country, ...]:
        return self._state.countries

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> str | None:
        return self._state.error

    def on_loaded(self, listener: LoadedListener) -> None:
        self._listeners.append(listener)

    def start(self) -> asyncio.Task:
        """Schedule the load on the running loop. Later calls reuse the first task."""
        if self._task is None:
            self._task = asyncio.create_task(self._load())
        return self._task

    async def wait_loaded(self) -> None:
        await self.start()

    async def _load(self) -> None:
        try:
            data = await self._api.fetch_all()
        except Exception:
            logger.exception("Error fetching countries")
            self._state = Failed(reason=LOAD_FAILED_MESSAGE)
            return

        self._state = Loaded(countries=dedupe_by_code(data))
        logger.info("Loaded %d countries", len(self._state.countries))
        for listener in self._listeners:
            try:
                listener(self._state.countries)
            except Exception:
                logger.exception("Country listener %r failed", listener)

    def get_by_code(self, code: str) -> Country | None:
        code = code.upper()
        return next((c for c in self.countries if c.cca3.upper() == code), None)
