"""Export Apigee API products as registry APIs"""
import logging
from typing import Dict, List, Any
from models.apigee_models import ApiProduct, ApiProxy
from models.registry_models import REGISTRY_V1, Api, ApiData, ExportDocument, Metadata
from discovery.deployments import DeploymentResolver
from discovery.references import build_proxy_index, reference_artifacts
from utils.labels import label
from utils.logger import ExportLogger

logger = logging.getLogger(__name__)


def assemble_document(apis: List[Api]) -> ExportDocument:
    """Wrap exported APIs into the top-level registry document"""
    return ExportDocument(api_version=REGISTRY_V1, items=apis)


class ProductExporter:
    """Export every API product of an organization.

    Products become APIs. The proxies a product binds become related and
    dependency artifacts on that API, and their deployments become API
    deployments.
    """

    def __init__(self, client, export_logger: ExportLogger):
        self.client = client
        self.logger = export_logger
        self.export_stats = {
            "products": 0,
            "bound_proxies": 0,
            "artifacts": 0,
            "deployments": 0,
        }

    @property
    def org(self) -> str:
        return self.client.org

    def export(self) -> ExportDocument:
        """Fetch, correlate and assemble the full document"""
        self.logger.info(f"Starting product export from org: {self.org}")

        try:
            products = self.client.list_products()
            proxy_index = build_proxy_index(self.client.list_proxies())

            apis: List[Api] = []
            apis_by_proxy: Dict[str, List[Api]] = {}
            for summary in products:
                product = self.client.get_product(summary.name)
                apis.append(self.transform_product(product, proxy_index, apis_by_proxy))

            resolver = DeploymentResolver(self.client, self.logger)
            self.export_stats["deployments"] = resolver.add_deployments(apis_by_proxy)

            self.logger.success(f"Export completed. Stats: {self.export_stats}")

        except Exception as e:
            self.logger.error(f"Export failed: {str(e)}")
            raise

        return assemble_document(apis)

    def transform_product(self, product: ApiProduct, proxy_index: Dict[str, ApiProxy],
                          apis_by_proxy: Dict[str, List[Api]]) -> Api:
        """Build the API for one product and register it under each bound proxy"""
        api = self.build_api(product)
        proxies = product.bound_proxies()

        for name in proxies:
            apis_by_proxy.setdefault(name, []).append(api)

        if proxies:
            api.data.artifacts.extend(
                reference_artifacts(self.org, proxies, proxy_index, self.client.proxy_console_url)
            )
            self.export_stats["artifacts"] += 2

        self.export_stats["products"] += 1
        self.export_stats["bound_proxies"] += len(proxies)
        logger.debug(f"Product {product.name} binds {len(proxies)} proxies")
        return api

    def build_api(self, product: ApiProduct) -> Api:
        return Api(
            api_version=REGISTRY_V1,
            kind="API",
            metadata=Metadata(
                name=label(product.name),
                labels={
                    "apihub-kind": "product",
                    "apihub-business-unit": self.org,
                    "apihub-target-users": "internal",
                },
                annotations={
                    "apigee-product": f"organizations/{self.org}/apiproducts/{product.name}",
                },
            ),
            data=ApiData(
                display_name=product.name,
                description=f"{product.name} API Product for internal/admin users.",
            ),
        )

    def get_export_report(self) -> Dict[str, Any]:
        """Get export statistics"""
        return {
            "statistics": self.export_stats,
            "warnings": self.logger.get_warnings(),
            "errors": self.logger.get_errors(),
        }
