from fastapi import APIRouter

from slugconnect.config import settings
from slugconnect.data import COLLEGES, FILTER_INTERESTS, MAJORS, POPULAR_INTERESTS, YEARS
from slugconnect.schemas.catalog import CatalogResponse


router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogResponse, summary="Onboarding and filter option lists")
def read_catalog() -> CatalogResponse:
    return CatalogResponse(
        majors=list(MAJORS),
        years=list(YEARS),
        colleges=list(COLLEGES),
        popular_interests=list(POPULAR_INTERESTS),
        filter_interests=list(FILTER_INTERESTS),
        max_interests=settings.max_interests,
    )
