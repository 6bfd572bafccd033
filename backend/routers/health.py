import time
from fastapi import APIRouter, Depends

from routers.deps import get_explorer
from services.explorer_service import CountryExplorer

router = APIRouter()

_start_time = time.time()


@router.get("/health")
async def health_check(explorer: CountryExplorer = Depends(get_explorer)):
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "version": "0.1.0",
        "countries_loaded": len(explorer.countries),
        "loading": explorer.loading,
    }
