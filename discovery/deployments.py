"""Attach proxy deployments to the product APIs that bind each proxy"""
import logging
from typing import Dict, Iterable, List
from models.apigee_models import Deployment
from models.registry_models import REGISTRY_V1, Api, ApiDeployment, ApiDeploymentData, Metadata
from discovery.environment_map import EnvironmentMap
from utils.labels import label
from utils.logger import ExportLogger

logger = logging.getLogger(__name__)


class DeploymentResolver:
    """Resolve deployments to hostnames and fan them out to owning APIs"""

    def __init__(self, client, export_logger: ExportLogger):
        self.client = client
        self.logger = export_logger

    def add_deployments(self, apis_by_proxy: Dict[str, List[Api]]) -> int:
        """Fetch deployments and the environment map, then attach deployments.

        Nothing is fetched when no product binds a proxy.
        """
        if not apis_by_proxy:
            return 0

        env_map = self.client.environment_map()
        deployments = self.client.list_deployments()
        self.logger.info(f"Resolving {len(deployments)} deployments")
        return self.attach_deployments(deployments, env_map, apis_by_proxy)

    def attach_deployments(self, deployments: Iterable[Deployment], env_map: EnvironmentMap,
                           apis_by_proxy: Dict[str, List[Api]]) -> int:
        """Append one ApiDeployment per (deployment, hostname, owning API).

        Returns the number of ApiDeployments attached.
        """
        attached = 0
        for dep in deployments:
            hostnames = env_map.hostnames(dep.environment)
            if hostnames is None:
                self.logger.warning(f"Failed to find hostnames for environment {dep.environment}")
                continue

            for hostname in hostnames:
                apis = apis_by_proxy.get(dep.api_proxy)
                if not apis:
                    self.logger.warning(
                        f"unknown product: {dep.api_proxy!r} for deployment: {dep.model_dump(by_alias=True)}"
                    )
                    continue

                envgroup = env_map.envgroup(hostname) or ""
                for api in apis:
                    api.data.deployments.append(self.build_deployment(dep, hostname, envgroup))
                    attached += 1

        logger.debug(f"Attached {attached} deployments")
        return attached

    def build_deployment(self, dep: Deployment, hostname: str, envgroup: str) -> ApiDeployment:
        org = self.client.org
        return ApiDeployment(
            api_version=REGISTRY_V1,
            kind="Deployment",
            metadata=Metadata(
                name=label(hostname),
                annotations={
                    "apigee-proxy-revision": f"organizations/{org}/apis/{dep.api_proxy}/revisions/{dep.revision}",
                    "apigee-environment": f"organizations/{org}/environments/{dep.environment}",
                    "apigee-envgroup": envgroup,
                },
            ),
            data=ApiDeploymentData(
                display_name=f"{dep.environment} ({hostname})",
                # TODO: use the proxy base path once proxy revisions are fetched
                endpoint_uri=f"https://{hostname}/{dep.api_proxy}",
            ),
        )
