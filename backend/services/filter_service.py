"""Filtered view over the loaded countries.

Two ways to change the view:

* local: ``set_search_term`` / ``set_region`` recompute the view from the
  loaded list, ANDing the name and region constraints;
* remote: ``search_countries`` and ``filter_by_region`` ask the API and put
  its answer in the view. The remote search ignores the selected region and
  the remote region filter ignores the search term.

Remote calls are not cancelled or coalesced. Each one gets a sequence
number; with ``search_sequence_guard`` on, a result older than the last one
applied is dropped, otherwise whichever resolves last wins.
"""

import logging
from typing import Iterable

from config import settings
from models.country import Country
from models.state import Failed, FilterState, Idle, Loaded, Loading, RemoteState
from utils.countries_client import CountryApi, CountryNotFoundError

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = "No countries found matching your search."
REGION_FAILED_MESSAGE = "Error filtering countries. Please try again."


def filter_countries(
    countries: Iterable[Country], search_term: str = "", region: str = ""
) -> tuple[Country, ...]:
    term = search_term.lower()
    region = region.lower()
    return tuple(
        c for c in countries
        if (not term or term in c.name.common.lower())
        and (not region or c.region.lower() == region)
    )


def _name_matches(country: Country, query: str) -> bool:
    query = query.lower()
    return query in country.name.common.lower() or query in country.name.official.lower()


def _language_matches(country: Country, query: str) -> bool:
    query = query.lower()
    return any(query in lang.lower() for lang in country.language_names)


def _combine(*groups: Iterable[Country]) -> tuple[Country, ...]:
    """Concatenate groups, keeping the first record seen for each cca3."""
    seen: set[str] = set()
    combined = []
    for group in groups:
        for country in group:
            if country.cca3 not in seen:
                seen.add(country.cca3)
                combined.append(country)
    return tuple(combined)


class FilterEngine:
    def __init__(
        self,
        api: CountryApi,
        sequence_guard: bool | None = None,
        language_min_length: int | None = None,
    ):
        self._api = api
        self._sequence_guard = (
            settings.search_sequence_guard if sequence_guard is None else sequence_guard
        )
        self._language_min_length = (
            settings.language_search_min_length if language_min_length is None
            else language_min_length
        )
        self._countries: tuple[Country, ...] = ()
        self._filters = FilterState()
        self._view: RemoteState = Idle()
        self._issued = 0
        self._applied = 0

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def search_term(self) -> str:
        return self._filters.search_term

    @property
    def selected_region(self) -> str:
        return self._filters.selected_region

    @property
    def state(self) -> RemoteState:
        return self._view

    @property
    def filtered_countries(self) -> list[Country]:
        return list(self._view.countries)

    @property
    def loading(self) -> bool:
        return self._view.loading

    @property
    def error(self) -> str | None:
        return self._view.error

    # -- local ------------------------------------------------------------

    def set_countries(self, countries: Iterable[Country]) -> None:
        self._countries = tuple(countries)
        self._recompute()

    def set_search_term(self, term: str) -> None:
        self._filters = self._filters.model_copy(update={"search_term": term})
        self._recompute()

    def set_region(self, region: str) -> None:
        self._filters = self._filters.model_copy(update={"selected_region": region})
        self._recompute()

    def reset_filters(self) -> None:
        self._filters = FilterState()
        self._view = Loaded(countries=self._countries)

    def _recompute(self) -> None:
        view = filter_countries(self._countries, self.search_term, self.selected_region)
        if self._view.loading:
            # a remote result is pending and will replace this
            self._view = Loading(countries=view)
        else:
            self._view = Loaded(countries=view)

    # -- remote -----------------------------------------------------------

    def _begin(self) -> int:
        self._issued += 1
        self._view = Loading(countries=self._view.countries)
        return self._issued

    def _apply(self, seq: int, state: RemoteState) -> None:
        if self._sequence_guard and seq < self._applied:
            logger.debug("Dropping stale result #%d (latest applied #%d)", seq, self._applied)
            return
        self._applied = seq
        self._view = state

    async def search_countries(self, query: str, include_language: bool = False) -> None:
        term = query.strip()
        if not term:
            self._filters = self._filters.model_copy(update={"search_term": ""})
            self._view = Loaded(countries=self._countries)
            return

        seq = self._begin()
        self._filters = self._filters.model_copy(update={"search_term": query})

        results = await self._search_by_name(term)
        if include_language and len(term) >= self._language_min_length:
            results = _combine(results, await self._search_by_language(term))
        else:
            results = _combine(results)

        if results:
            self._apply(seq, Loaded(countries=results))
        else:
            self._apply(seq, Failed(reason=NO_MATCH_MESSAGE))

    async def _search_by_name(self, term: str) -> list[Country]:
        try:
            return list(await self._api.fetch_by_name(term))
        except CountryNotFoundError:
            return [c for c in self._countries if _name_matches(c, term)]
        except Exception:
            logger.exception("Error searching by name: %r", term)
            return []

    async def _search_by_language(self, term: str) -> list[Country]:
        try:
            return list(await self._api.fetch_by_language(term))
        except Exception:
            logger.exception("Error searching by language: %r", term)
            return [c for c in self._countries if _language_matches(c, term)]

    async def filter_by_region(self, region: str) -> None:
        self._filters = self._filters.model_copy(update={"selected_region": region})
        if not region:
            self._view = Loaded(countries=self._countries)
            return

        seq = self._begin()
        try:
            data = await self._api.fetch_by_region(region)
        except Exception:
            logger.exception("Error filtering countries by region: %r", region)
            self._apply(seq, Failed(reason=REGION_FAILED_MESSAGE))
            return
        self._apply(seq, Loaded(countries=_combine(data)))
