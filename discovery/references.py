"""Proxy index and the related/dependency reference lists attached to product APIs"""
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from pydantic import ValidationError
from models.apigee_models import ApiProxy
from models.registry_models import REGISTRY_V1, Artifact, Metadata, Reference, ReferenceList

RELATED_ARTIFACT = "apihub-related"
DEPENDENCIES_ARTIFACT = "apihub-dependencies"


class ArtifactError(Exception):
    """A reference list could not be turned into artifact data"""


def build_proxy_index(proxies: Iterable[ApiProxy]) -> Dict[str, ApiProxy]:
    """Index proxies by name; a repeated name keeps the last record"""
    return {proxy.name: proxy for proxy in proxies}


def build_reference_lists(org: str, proxy_names: List[str], proxy_index: Dict[str, ApiProxy],
                          console_url: Callable[[Optional[ApiProxy]], str]
                          ) -> Tuple[ReferenceList, ReferenceList]:
    """Build the related and dependency lists for a product's bound proxies.

    Related references point at the registry APIs exported for each proxy.
    Dependency references point at the proxy itself in the Apigee console;
    a proxy missing from ``proxy_index`` gets an empty URI.
    """
    related = ReferenceList()
    dependencies = ReferenceList()
    for name in proxy_names:
        related.references.append(Reference(
            id=f"{org}-{name}-proxy",
            resource=f"projects/{org}/locations/global/apis/{org}-{name}-proxy",
        ))
        dependencies.references.append(Reference(
            id=name,
            display_name=f"{name} (Apigee)",
            uri=console_url(proxy_index.get(name)),
        ))
    return related, dependencies


def reference_artifact(name: str, reference_list: ReferenceList) -> Artifact:
    """Wrap a reference list as a ReferenceList artifact"""
    try:
        data = reference_list.model_dump(mode="json", by_alias=True, exclude_defaults=True)
    except (ValueError, TypeError) as e:
        raise ArtifactError(f"Failed to encode reference list {name}: {str(e)}") from e

    try:
        return Artifact(
            api_version=REGISTRY_V1,
            kind="ReferenceList",
            metadata=Metadata(name=name),
            data=data,
        )
    except ValidationError as e:
        raise ArtifactError(f"Invalid artifact {name}: {str(e)}") from e


def reference_artifacts(org: str, proxy_names: List[str], proxy_index: Dict[str, ApiProxy],
                        console_url: Callable[[Optional[ApiProxy]], str]) -> List[Artifact]:
    """Related and dependency artifacts, in that order"""
    related, dependencies = build_reference_lists(org, proxy_names, proxy_index, console_url)
    return [
        reference_artifact(RELATED_ARTIFACT, related),
        reference_artifact(DEPENDENCIES_ARTIFACT, dependencies),
    ]
