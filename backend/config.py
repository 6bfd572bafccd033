import json

from pydantic_settings import BaseSettings
from pydantic import field_validator
from pathlib import Path


class Settings(BaseSettings):
    restcountries_base_url: str = "https://restcountries.com/v3.1"
    request_timeout_seconds: float = 10.0
    all_fields: list[str] = [
        "name", "cca3", "region", "capital", "population", "languages", "flags",
    ]
    storage_path: str = str(Path.home() / ".countryscope" / "storage.json")
    language_search_min_length: int = 3
    search_debounce_ms: int = 300
    search_sequence_guard: bool = True
    auth_latency_ms: int = 500
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    search_rate_limit: str = "30/minute"
    log_level: str = "INFO"

    @field_validator("cors_origins", "all_fields", mode="before")
    @classmethod
    def parse_list(cls, v):
        if isinstance(v, str):
            # Accept JSON array or comma-separated string
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent / ".env"),
        "env_file_encoding": "utf-8",
    }


settings = Settings()
