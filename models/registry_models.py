"""Registry document models produced by the product export.

Every model serializes with camelCase aliases. Dump with ``by_alias=True`` and
``exclude_defaults=True`` so that unset fields are omitted from the document.
"""
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from types import MappingProxyType
from typing import List, Dict, Any, Mapping

REGISTRY_V1 = "apigeeregistry/v1"


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


class RegistryModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Metadata(RegistryModel):
    name: str
    labels: Dict[str, str] = {}
    annotations: Dict[str, str] = {}


class Reference(RegistryModel):
    id: str
    display_name: str = ""
    resource: str = ""
    uri: str = ""


class ReferenceList(RegistryModel):
    references: List[Reference] = []


class Artifact(RegistryModel):
    model_config = ConfigDict(frozen=True)

    api_version: str
    kind: str
    metadata: Metadata
    data: Mapping[str, Any]

    @field_validator("data")
    @classmethod
    def freeze_data(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        """Store the payload as read-only mappings and tuples"""
        return _freeze(v)

    @field_serializer("data")
    def thaw_data(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return _thaw(data)


class ApiDeploymentData(RegistryModel):
    display_name: str = ""
    endpoint_uri: str = Field("", alias="endpointURI")


class ApiDeployment(RegistryModel):
    api_version: str
    kind: str
    metadata: Metadata
    data: ApiDeploymentData


class ApiData(RegistryModel):
    display_name: str = ""
    description: str = ""
    deployments: List[ApiDeployment] = []
    artifacts: List[Artifact] = []


class Api(RegistryModel):
    api_version: str
    kind: str
    metadata: Metadata
    data: ApiData


class ExportDocument(RegistryModel):
    api_version: str
    items: List[Api]
