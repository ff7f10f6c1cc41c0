"""Shared fixtures: an in-memory stand-in for the Apigee client."""

from typing import List, Optional

import pytest

from discovery.environment_map import EnvironmentMap
from models.apigee_models import (
    ApiProduct,
    ApiProxy,
    Deployment,
    EnvironmentGroup,
    EnvironmentGroupAttachment,
)
from utils.logger import ExportLogger


class FakeApigeeClient:
    """Serves fixed collections and records which ones were fetched."""

    def __init__(self, org="myorg", products=None, proxies=None, deployments=None,
                 envgroups=None, fail_on: Optional[str] = None):
        self.org = org
        self.products: List[ApiProduct] = products or []
        self.proxies: List[ApiProxy] = proxies or []
        self.deployments: List[Deployment] = deployments or []
        # list of (EnvironmentGroup, [EnvironmentGroupAttachment])
        self.envgroups = envgroups or []
        self.fail_on = fail_on
        self.calls: List[str] = []

    def _record(self, call: str):
        self.calls.append(call)
        if self.fail_on == call:
            raise RuntimeError(f"{call} failed")

    def list_products(self):
        self._record("list_products")
        return [ApiProduct(name=p.name) for p in self.products]

    def get_product(self, name):
        self._record("get_product")
        return next(p for p in self.products if p.name == name)

    def list_proxies(self):
        self._record("list_proxies")
        return list(self.proxies)

    def list_deployments(self):
        self._record("list_deployments")
        return list(self.deployments)

    def environment_map(self):
        self._record("environment_map")
        return EnvironmentMap.build(self.org, self.envgroups)

    def proxy_console_url(self, proxy):
        if proxy is None:
            return ""
        return f"https://console.cloud.google.com/apigee/proxies/{proxy.name}/overview?project={self.org}"


def envgroup(name, hostnames, environments):
    return (
        EnvironmentGroup(name=name, hostnames=hostnames),
        [EnvironmentGroupAttachment(environment=env) for env in environments],
    )


@pytest.fixture
def export_logger():
    return ExportLogger("test")


@pytest.fixture
def round_trip_client():
    """One product bound to two proxies, deployed once to a single-hostname environment."""
    return FakeApigeeClient(
        products=[ApiProduct(name="helloworld", proxies=["hello", "hello-admin"])],
        proxies=[ApiProxy(name="hello"), ApiProxy(name="hello-admin")],
        deployments=[Deployment(api_proxy="hello", revision="2", environment="test")],
        envgroups=[envgroup("test-group", ["api.example.com"], ["test"])],
    )
