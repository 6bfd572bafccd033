from pydantic import BaseModel, ConfigDict, Field, field_validator


class CountryName(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    common: str = ""
    official: str = ""


class Country(BaseModel):
    """A country record as returned by the REST Countries API.

    Only the attributes used for filtering and favorites are typed; anything
    else in the payload is kept as-is.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    cca3: str
    name: CountryName = Field(default_factory=CountryName)
    region: str = ""
    capital: list[str] = Field(default_factory=list)
    population: int = Field(default=0, ge=0)
    languages: dict[str, str] | None = None
    flags: dict[str, str] = Field(default_factory=dict)

    @field_validator("name", mode="before")
    @classmethod
    def parse_name(cls, v):
        if isinstance(v, str):
            return {"common": v, "official": v}
        if v is None:
            return {}
        return v

    @field_validator("region", mode="before")
    @classmethod
    def parse_region(cls, v):
        return v or ""

    @field_validator("capital", mode="before")
    @classmethod
    def parse_capital(cls, v):
        return v or []

    @field_validator("flags", mode="before")
    @classmethod
    def parse_flags(cls, v):
        return v or {}

    @property
    def language_names(self) -> list[str]:
        return list((self.languages or {}).values())
