"""
Provider identity and deployment manifest endpoints.
"""
from fastapi import APIRouter, Depends

from exchange_relay.api.models import ErrorResponse, ManifestResponse, ProviderInfo
from exchange_relay.config.settings import Settings, get_settings
from exchange_relay.controllers.metadata_controller import MetadataController


def get_metadata_controller(settings: Settings = Depends(get_settings)) -> MetadataController:
    """Dependency injection for MetadataController."""
    return MetadataController(settings)


router = APIRouter()


@router.get("/provider", response_model=ProviderInfo, response_model_by_alias=True)
async def provider_info(controller: MetadataController = Depends(get_metadata_controller)):
    """Static provider identity."""
    return controller.provider_info()


@router.get(
    "/manifest",
    response_model=ManifestResponse,
    response_model_by_alias=True,
    responses={500: {"model": ErrorResponse, "description": "MODEL_MAP misconfigured"}},
)
async def manifest(controller: MetadataController = Depends(get_metadata_controller)):
    """Deployments available through this relay (displayName → deploymentName)."""
    return controller.manifest()
