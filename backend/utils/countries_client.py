import logging
from typing import Protocol
from urllib.parse import quote

import httpx

from config import settings
from models.country import Country

logger = logging.getLogger(__name__)

_client: httpx.AsyncClient | None = None


class CountryApiError(Exception):
    """A REST Countries call failed."""


class CountryNotFoundError(CountryApiError):
    """The lookup matched no country."""


class CountryApi(Protocol):
    async def fetch_all(self) -> list[Country]: ...

    async def fetch_by_code(self, code: str) -> Country: ...

    async def fetch_by_name(self, name: str) -> list[Country]: ...

    async def fetch_by_region(self, region: str) -> list[Country]: ...

    async def fetch_by_language(self, language: str) -> list[Country]: ...


def get_client() -> httpx.AsyncClient:
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            timeout=settings.request_timeout_seconds,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            headers={"Accept": "application/json"},
        )
    return _client


async def close_client():
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


class RestCountriesClient:
    """Thin async wrapper over https://restcountries.com/v3.1."""

    def __init__(self, client: httpx.AsyncClient | None = None,
                 base_url: str | None = None):
        self._client = client
        self._base_url = (base_url or settings.restcountries_base_url).rstrip("/")

    async def _get(self, path: str, params: dict | None = None):
        client = self._client or get_client()
        url = f"{self._base_url}/{path}"
        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            raise CountryApiError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise CountryNotFoundError("Not Found")
        if response.status_code != 200:
            logger.error("REST Countries error %s: %s", response.status_code, response.text[:200])
            raise CountryApiError(f"HTTP error! Status: {response.status_code}")
        return response.json()

    async def _get_list(self, path: str, params: dict | None = None) -> list[Country]:
        data = await self._get(path, params)
        if isinstance(data, dict):
            data = [data]
        return [Country.model_validate(c) for c in data]

    async def fetch_all(self) -> list[Country]:
        return await self._get_list("all", {"fields": ",".join(settings.all_fields)})

    async def fetch_by_code(self, code: str) -> Country:
        countries = await self._get_list(f"alpha/{quote(code)}")
        if not countries:
            raise CountryNotFoundError("Not Found")
        return countries[0]

    async def fetch_by_name(self, name: str) -> list[Country]:
        return await self._get_list(f"name/{quote(name)}")

    async def fetch_by_region(self, region: str) -> list[Country]:
        return await self._get_list(f"region/{quote(region)}")

    async def fetch_by_language(self, language: str) -> list[Country]:
        return await self._get_list(f"lang/{quote(language)}")
