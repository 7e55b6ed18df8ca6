"""Maps API endpoint.

GET /api/maps - Known map names for the match form
"""

from __future__ import annotations

from fastapi import APIRouter

from nolu.models.domain import KNOWN_MAPS
from nolu.models.types import MapsResponse

router = APIRouter()


@router.get("/maps", response_model=MapsResponse)
def get_maps() -> MapsResponse:
    """List known map names. Matches may still use any map name."""
    return MapsResponse(maps=list(KNOWN_MAPS))
