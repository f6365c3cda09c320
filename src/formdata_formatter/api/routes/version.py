"""
Version information endpoint.
"""

from fastapi import APIRouter

from ...models.api_models import VersionResponse
from ...version import API_VERSION, FORMATTER_VERSION, PARSER_VERSION

router = APIRouter()


@router.get("/version", response_model=VersionResponse)
async def get_version() -> VersionResponse:
    return VersionResponse(
        api_version=API_VERSION,
        formatter_version=FORMATTER_VERSION,
        parser_version=PARSER_VERSION,
    )
