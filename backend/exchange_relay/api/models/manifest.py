"""
Provider metadata and deployment manifest models.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field

PROVIDER_ID = "azure_openai"


class ProviderInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider_id: str = Field(default=PROVIDER_ID, alias="providerId")
    name: str
    version: str


class ManifestDeployment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(alias="displayName")
    deployment_name: str = Field(alias="deploymentName")


class ManifestResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider_id: str = Field(default=PROVIDER_ID, alias="providerId")
    name: str
    version: str
    deployments: List[ManifestDeployment]
