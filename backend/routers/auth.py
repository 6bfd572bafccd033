from fastapi import APIRouter, Depends, HTTPException

from models.identity import Credentials, Identity, Registration
from routers.deps import get_explorer
from services.auth_service import AuthError, login_user, register_user
from services.explorer_service import CountryExplorer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Identity)
async def login(req: Credentials, explorer: CountryExplorer = Depends(get_explorer)):
    try:
        identity = await login_user(req.email, req.password)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))
    explorer.identity.login(identity)
    return identity


@router.post("/register", response_model=Identity)
async def register(req: Registration, explorer: CountryExplorer = Depends(get_explorer)):
    try:
        identity = await register_user(req.email, req.password, req.name)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))
    explorer.identity.register(identity)
    return identity


@router.post("/logout")
async def logout(explorer: CountryExplorer = Depends(get_explorer)):
    explorer.identity.logout()
    return {"status": "ok"}


@router.get("/me", response_model=Identity | None)
async def me(explorer: CountryExplorer = Depends(get_explorer)):
    return explorer.identity.current_identity
