import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from config import settings
from routers import auth, countries, favorites, health
from services.explorer_service import CountryExplorer
from services.storage_service import JsonFileStorage
from utils.countries_client import RestCountriesClient, close_client
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

app = FastAPI(title="CountryScope", version="0.1.0")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(countries.router)
app.include_router(favorites.router)
app.include_router(auth.router)


@app.get("/")
async def root():
    return {
        "name": "CountryScope API",
        "version": "0.1.0",
        "endpoints": ["/health", "/countries", "/favorites", "/auth"],
    }


@app.on_event("startup")
async def startup():
    setup_logging(settings.log_level)
    # One session per process; tests install their own explorer beforehand
    if getattr(app.state, "explorer", None) is None:
        api = RestCountriesClient()
        app.state.country_api = api
        app.state.explorer = CountryExplorer(api, JsonFileStorage(settings.storage_path))
    app.state.explorer.start()
    logger.info("CountryScope API is running")


@app.on_event("shutdown")
async def shutdown():
    await close_client()
