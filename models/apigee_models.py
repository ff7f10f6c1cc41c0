"""Apigee management API records consumed by the product export"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional


class ApigeeRecord(BaseModel):
    model_config = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)


class OperationConfig(ApigeeRecord):
    api_source: str = ""
    operations: List[dict] = []


class OperationGroup(ApigeeRecord):
    operation_configs: List[OperationConfig] = []
    operation_config_type: Optional[str] = None


class ApiProduct(ApigeeRecord):
    name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    approval_type: Optional[str] = None
    proxies: List[str] = []
    environments: List[str] = []
    scopes: List[str] = []
    operation_group: Optional[OperationGroup] = None

    def bound_proxies(self) -> List[str]:
        """Explicit proxies followed by operation config sources, duplicates kept"""
        proxies = list(self.proxies)
        if self.operation_group:
            for oc in self.operation_group.operation_configs:
                if oc.api_source:
                    proxies.append(oc.api_source)
        return proxies


class ApiProxy(ApigeeRecord):
    name: str
    revision: List[str] = []
    latest_revision_id: Optional[str] = None
    api_proxy_type: Optional[str] = None


class Deployment(ApigeeRecord):
    api_proxy: str
    revision: str = ""
    environment: str
    deploy_start_time: Optional[str] = None


class EnvironmentGroup(ApigeeRecord):
    name: str
    hostnames: List[str] = []
    state: Optional[str] = None


class EnvironmentGroupAttachment(ApigeeRecord):
    name: Optional[str] = None
    environment: str
    environment_group_id: Optional[str] = None
