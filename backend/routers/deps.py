from fastapi import Request

from services.explorer_service import CountryExplorer
from utils.countries_client import CountryApi


def get_explorer(request: Request) -> CountryExplorer:
    return request.app.state.explorer


def get_country_api(request: Request) -> CountryApi:
    return request.app.state.country_api
