"""Shared fixtures: a scriptable fake REST Countries API and sample data."""

import asyncio
import os

# No simulated latency in the mock identity provider during tests
os.environ.setdefault("AUTH_LATENCY_MS", "0")

import pytest

from models.country import Country
from services.storage_service import MemoryStorage
from utils.countries_client import CountryNotFoundError


def make_country(cca3, common, region, official=None, languages=None, **extra) -> Country:
    return Country.model_validate({
        "cca3": cca3,
        "name": {"common": common, "official": official or common},
        "region": region,
        "languages": languages,
        **extra,
    })


GERMANY = make_country("DEU", "Germany", "Europe", "Federal Republic of Germany", {"deu": "German"})
JAPAN = make_country("JPN", "Japan", "Asia", languages={"jpn": "Japanese"})
AUSTRIA = make_country("AUT", "Austria", "Europe", "Republic of Austria",
                       {"bar": "Austro-Bavarian German", "deu": "German"})
BRAZIL = make_country("BRA", "Brazil", "Americas", "Federative Republic of Brazil",
                      {"por": "Portuguese"})
PORTUGAL = make_country("PRT", "Portugal", "Europe", "Portuguese Republic", {"por": "Portuguese"})
ANTARCTICA = make_country("ATA", "Antarctica", "Antarctic")

SAMPLE = [GERMANY, JAPAN, AUSTRIA, BRAZIL, PORTUGAL, ANTARCTICA]


class FakeCountryApi:
    """In-memory stand-in for RestCountriesClient.

    ``by_name`` / ``by_region`` / ``by_language`` map a lookup argument to a
    result list or an exception to raise. Unknown names and languages raise
    CountryNotFoundError; unknown regions are answered from ``countries``.
    Setting ``gates[(op, arg)]`` to an Event holds that call until it is set.
    """

    def __init__(self, countries=None):
        self.countries = list(SAMPLE if countries is None else countries)
        self.all_error: Exception | None = None
        self.by_name: dict[str, list | Exception] = {}
        self.by_region: dict[str, list | Exception] = {}
        self.by_language: dict[str, list | Exception] = {}
        self.gates: dict[tuple[str, str], asyncio.Event] = {}
        self.calls: list[tuple[str, str]] = []

    async def _enter(self, op: str, arg: str = "") -> None:
        self.calls.append((op, arg))
        gate = self.gates.get((op, arg))
        if gate is not None:
            await gate.wait()

    @staticmethod
    def _answer(result):
        if isinstance(result, Exception):
            raise result
        return list(result)

    def calls_to(self, op: str) -> list[str]:
        return [arg for name, arg in self.calls if name == op]

    async def fetch_all(self):
        await self._enter("all")
        if self.all_error is not None:
            raise self.all_error
        return list(self.countries)

    async def fetch_by_code(self, code):
        await self._enter("code", code)
        for country in self.countries:
            if country.cca3 == code.upper():
                return country
        raise CountryNotFoundError("Not Found")

    async def fetch_by_name(self, name):
        await self._enter("name", name)
        return self._answer(self.by_name.get(name, CountryNotFoundError("Not Found")))

    async def fetch_by_region(self, region):
        await self._enter("region", region)
        if region in self.by_region:
            return self._answer(self.by_region[region])
        return [c for c in self.countries if c.region.lower() == region.lower()]

    async def fetch_by_language(self, language):
        await self._enter("language", language)
        return self._answer(self.by_language.get(language, CountryNotFoundError("Not Found")))


def codes(countries) -> list[str]:
    return [c.cca3 for c in countries]


@pytest.fixture
def api():
    return FakeCountryApi()


@pytest.fixture
def storage():
    return MemoryStorage()
