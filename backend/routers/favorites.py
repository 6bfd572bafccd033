from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from models.country import Country
from routers.deps import get_explorer
from services.explorer_service import CountryExplorer

router = APIRouter(prefix="/favorites", tags=["favorites"])


class FavoriteStatus(BaseModel):
    code: str
    favorite: bool


@router.get("", response_model=list[str])
async def list_favorites(explorer: CountryExplorer = Depends(get_explorer)):
    return explorer.favorites


@router.get("/countries", response_model=list[Country])
async def favorite_countries(explorer: CountryExplorer = Depends(get_explorer)):
    return explorer.get_favorite_countries()


@router.post("/{code}", response_model=FavoriteStatus)
async def toggle_favorite(code: str, explorer: CountryExplorer = Depends(get_explorer)):
    if explorer.identity.current_identity is None:
        raise HTTPException(status_code=401, detail="Sign in to manage favorites")

    code = code.upper()
    explorer.toggle_favorite(code)
    return FavoriteStatus(code=code, favorite=explorer.is_favorite(code))
