from models.country import Country
from models.state import ExplorerView, Idle
from services.country_service import CountryRepository
from services.favorites_service import FavoritesStore
from services.filter_service import FilterEngine
from services.identity_service import IdentityContext
from services.storage_service import KeyValueStorage
from utils.countries_client import CountryApi


class CountryExplorer:
    """Everything a front end needs about countries, in one object.

    Build it once per session at the application root. Construction wires
    identity → favorites and repository → filter engine; ``start()`` kicks
    off the one-time dataset load.
    """

    def __init__(
        self,
        api: CountryApi,
        storage: KeyValueStorage,
        identity: IdentityContext | None = None,
        sequence_guard: bool | None = None,
    ):
        self.identity = identity or IdentityContext(storage)
        self._repository = CountryRepository(api)
        self._filter = FilterEngine(api, sequence_guard=sequence_guard)
        self._favorites = FavoritesStore(storage)

        self.identity.on_change(self._favorites.on_identity_changed)
        self._repository.on_loaded(self._filter.set_countries)

    def start(self) -> None:
        self._repository.start()

    async def wait_loaded(self) -> None:
        await self._repository.wait_loaded()

    @property
    def countries(self) -> list[Country]:
        return list(self._repository.countries)

    @property
    def filtered_countries(self) -> list[Country]:
        return self._filter.filtered_countries

    @property
    def loading(self) -> bool:
        return self._repository.loading or self._filter.loading

    @property
    def error(self) -> str | None:
        # the engine leaves Idle once it has a view; from then on its state is current
        if isinstance(self._filter.state, Idle):
            return self._repository.error
        return self._filter.error

    @property
    def search_term(self) -> str:
        return self._filter.search_term

    @property
    def selected_region(self) -> str:
        return self._filter.selected_region

    @property
    def favorites(self) -> list[str]:
        return self._favorites.favorites

    async def search_countries(self, query: str, include_language: bool = False) -> None:
        await self._filter.search_countries(query, include_language)

    async def filter_by_region(self, region: str) -> None:
        await self._filter.filter_by_region(region)

    def reset_filters(self) -> None:
        self._filter.reset_filters()

    def toggle_favorite(self, code: str) -> None:
        self._favorites.toggle_favorite(code)

    def is_favorite(self, code: str) -> bool:
        return self._favorites.is_favorite(code)

    def get_favorite_countries(self) -> list[Country]:
        return self._favorites.get_favorite_countries(self._repository.countries)

    def snapshot(self) -> ExplorerView:
        return ExplorerView(
            filtered_countries=self.filtered_countries,
            loading=self.loading,
            error=self.error,
            search_term=self.search_term,
            selected_region=self.selected_region,
            favorites=self.favorites,
        )
