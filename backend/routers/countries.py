from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.country import Country
from models.state import ExplorerView
from routers.deps import get_country_api, get_explorer
from services.explorer_service import CountryExplorer
from utils.countries_client import CountryApi, CountryApiError, CountryNotFoundError

router = APIRouter(prefix="/countries", tags=["countries"])

limiter = Limiter(key_func=get_remote_address)


class SearchRequest(BaseModel):
    query: str = ""
    include_language: bool = False


class RegionRequest(BaseModel):
    region: str = ""


@router.get("", response_model=list[Country])
async def list_countries(explorer: CountryExplorer = Depends(get_explorer)):
    return explorer.countries


@router.get("/view", response_model=ExplorerView)
async def get_view(explorer: CountryExplorer = Depends(get_explorer)):
    return explorer.snapshot()


@router.post("/search", response_model=ExplorerView)
@limiter.limit(settings.search_rate_limit)
async def search_countries(
    request: Request,
    req: SearchRequest,
    explorer: CountryExplorer = Depends(get_explorer),
):
    await explorer.search_countries(req.query, req.include_language)
    return explorer.snapshot()


@router.post("/region", response_model=ExplorerView)
async def filter_by_region(req: RegionRequest, explorer: CountryExplorer = Depends(get_explorer)):
    await explorer.filter_by_region(req.region.strip())
    return explorer.snapshot()


@router.post("/reset", response_model=ExplorerView)
async def reset_filters(explorer: CountryExplorer = Depends(get_explorer)):
    explorer.reset_filters()
    return explorer.snapshot()


@router.get("/{code}", response_model=Country)
async def get_country(
    code: str,
    explorer: CountryExplorer = Depends(get_explorer),
    api: CountryApi = Depends(get_country_api),
):
    code = code.upper()
    country = next((c for c in explorer.countries if c.cca3 == code), None)
    if country:
        return country

    # Not loaded yet (or the load failed); ask the API directly
    try:
        return await api.fetch_by_code(code)
    except CountryNotFoundError:
        raise HTTPException(status_code=404, detail="Country not found")
    except CountryApiError as e:
        raise HTTPException(status_code=502, detail=str(e))
