"""Explicit state for the remote-backed parts of the explorer.

A component is in exactly one of Idle, Loading, Loaded or Failed, so a stale
error can never sit next to ``loading=True``.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from models.country import Country


class _State(BaseModel):
    model_config = ConfigDict(frozen=True)

    countries: tuple[Country, ...] = ()

    @property
    def loading(self) -> bool:
        return False

    @property
    def error(self) -> str | None:
        return None


class Idle(_State):
    kind: Literal["idle"] = "idle"


class Loading(_State):
    """In flight. ``countries`` keeps the view shown until the result lands."""

    kind: Literal["loading"] = "loading"

    @property
    def loading(self) -> bool:
        return True


class Loaded(_State):
    kind: Literal["loaded"] = "loaded"


class Failed(_State):
    kind: Literal["failed"] = "failed"
    reason: str

    @property
    def error(self) -> str | None:
        return self.reason


RemoteState = Annotated[
    Union[Idle, Loading, Loaded, Failed], Field(discriminator="kind")
]


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    selected_region: str = ""


class ExplorerView(BaseModel):
    filtered_countries: list[Country]
    loading: bool
    error: str | None = None
    search_term: str = ""
    selected_region: str = ""
    favorites: list[str] = []
