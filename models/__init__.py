"""Models package"""
from .apigee_models import (
    ApiProduct,
    ApiProxy,
    Deployment,
    EnvironmentGroup,
    EnvironmentGroupAttachment,
    OperationConfig,
    OperationGroup
)
from .config_models import ApigeeConfig, ExportConfig
from .registry_models import (
    REGISTRY_V1,
    Api,
    ApiData,
    ApiDeployment,
    ApiDeploymentData,
    Artifact,
    ExportDocument,
    Metadata,
    Reference,
    ReferenceList
)

__all__ = [
    "ApiProduct",
    "ApiProxy",
    "Deployment",
    "EnvironmentGroup",
    "EnvironmentGroupAttachment",
    "OperationConfig",
    "OperationGroup",
    "ApigeeConfig",
    "ExportConfig",
    "REGISTRY_V1",
    "Api",
    "ApiData",
    "ApiDeployment",
    "ApiDeploymentData",
    "Artifact",
    "ExportDocument",
    "Metadata",
    "Reference",
    "ReferenceList"
]
