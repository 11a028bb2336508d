"""
Controller for provider metadata: identity, deployment manifest and the
landing page.
"""
from exchange_relay.api.models.manifest import (
    ManifestDeployment,
    ManifestResponse,
    ProviderInfo,
)
from exchange_relay.config.settings import Settings, count_model_map_entries, resolve_model_map
from exchange_relay.services.home_page import render_home_html

PROVIDER_NAME = "Azure OpenAI Relay"
MANIFEST_NAME = "Exchange Relay"


class MetadataController:
    """Controller for read-only relay metadata."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def provider_info(self) -> ProviderInfo:
        return ProviderInfo(name=PROVIDER_NAME, version=self.settings.relay_version)

    def manifest(self) -> ManifestResponse:
        """
        List configured deployments, sorted by display name.

        Raises:
            ConfigurationError: If MODEL_MAP is invalid
        """
        model_map = resolve_model_map(self.settings)
        deployments = [
            ManifestDeployment(display_name=name, deployment_name=deployment)
            for name, deployment in sorted(model_map.items())
        ]
        return ManifestResponse(
            name=MANIFEST_NAME,
            version=self.settings.relay_version,
            deployments=deployments,
        )

    def home_html(self) -> str:
        settings = self.settings
        return render_home_html(
            version=settings.relay_version,
            has_endpoint=bool(settings.aoai_endpoint),
            has_api_key=bool(settings.aoai_api_key),
            api_version=settings.aoai_api_version or "(unset)",
            model_count=count_model_map_entries(settings),
        )
