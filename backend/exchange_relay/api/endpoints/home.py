"""
Human-readable landing pages.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from exchange_relay.api.endpoints.metadata import get_metadata_controller
from exchange_relay.controllers.metadata_controller import MetadataController

router = APIRouter()


@router.api_route("/", methods=["GET", "HEAD"], response_class=HTMLResponse, include_in_schema=False)
@router.api_route("/kea", methods=["GET", "HEAD"], response_class=HTMLResponse, include_in_schema=False)
@router.api_route("/kea/v1", methods=["GET", "HEAD"], response_class=HTMLResponse, include_in_schema=False)
async def home(controller: MetadataController = Depends(get_metadata_controller)) -> HTMLResponse:
    return HTMLResponse(
        content=controller.home_html(),
        headers={"Cache-Control": "no-store"},
    )
