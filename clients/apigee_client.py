"""Apigee management API client"""
import logging
import requests
import google.auth
from typing import Dict, Any, List, Optional
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from google.auth.transport.requests import Request
from models.apigee_models import (
    ApiProduct, ApiProxy, Deployment, EnvironmentGroup, EnvironmentGroupAttachment
)
from discovery.environment_map import EnvironmentMap

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/cloud-platform']
CONSOLE_URL = "https://console.cloud.google.com/apigee/proxies/{proxy}/overview?project={org}"


class ApigeeAPIError(Exception):
    """A management API call failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApigeeClient:
    """Read-only client for the Apigee management API of one organization.

    Every collection is fetched at most once per client; later calls return
    the cached records.
    """

    def __init__(self, org: str, token: Optional[str] = None,
                 service_account_key_path: Optional[str] = None,
                 base_url: str = "https://apigee.googleapis.com/v1",
                 page_size: int = 1000, session: Optional[requests.Session] = None):
        self.org = org
        self.token = token
        self.service_account_key_path = service_account_key_path
        self.base_url = f"{base_url.rstrip('/')}/organizations/{org}"
        self.page_size = page_size
        self.session = session or requests.Session()
        self.credentials = None
        self._cache: Dict[str, Any] = {}

    @classmethod
    def from_config(cls, config) -> "ApigeeClient":
        return cls(
            org=config.organization,
            token=config.token,
            service_account_key_path=config.service_account_key_path,
            base_url=config.base_url,
            page_size=config.page_size,
        )

    def _get_access_token(self) -> str:
        """Get an access token, preferring an explicit one"""
        if self.token:
            return self.token

        if self.credentials is None:
            if self.service_account_key_path:
                self.credentials = service_account.Credentials.from_service_account_file(
                    self.service_account_key_path, scopes=SCOPES
                )
            else:
                self.credentials, _ = google.auth.default(scopes=SCOPES)

        if not self.credentials.valid:
            self.credentials.refresh(Request())
        return self.credentials.token

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        """Make HTTP request to the management API"""
        url = f"{self.base_url}/{endpoint}" if endpoint else self.base_url

        try:
            headers = kwargs.pop("headers", {})
            headers["Authorization"] = f"Bearer {self._get_access_token()}"
            logger.debug(f"{method} {url}")
            response = self.session.request(method, url, headers=headers, **kwargs)
        except (requests.RequestException, GoogleAuthError) as e:
            raise ApigeeAPIError(f"{method} {url} failed: {str(e)}") from e

        if response.status_code != 200:
            raise ApigeeAPIError(
                f"{method} {url} returned {response.status_code}: {response.text}",
                status_code=response.status_code
            )
        return response.json() if response.content else {}

    def _list_pages(self, endpoint: str, key: str) -> List[Dict[str, Any]]:
        """Collect every item of a pageToken-paginated collection"""
        items = []
        params = {}
        while True:
            data = self._make_request("GET", endpoint, params=dict(params))
            items.extend(data.get(key, []))
            next_token = data.get("nextPageToken")
            if not next_token:
                return items
            params["pageToken"] = next_token

    def _cached(self, key: str, fetch):
        if key not in self._cache:
            self._cache[key] = fetch()
        return self._cache[key]

    def list_products(self) -> List[ApiProduct]:
        """List all API products, paging with startKey"""
        return self._cached("products", self._fetch_products)

    def _fetch_products(self) -> List[ApiProduct]:
        products = []
        params = {"expand": "true", "count": self.page_size}
        start_key = None
        while True:
            page = self._make_request("GET", "apiproducts", params=dict(params)).get("apiProduct", [])
            full_page = len(page) >= self.page_size
            # startKey is inclusive, so every page after the first repeats the last product
            if start_key and page and page[0].get("name") == start_key:
                page = page[1:]
            products.extend(ApiProduct(**p) for p in page)
            if not full_page or not page:
                break
            start_key = page[-1]["name"]
            params["startKey"] = start_key
        logger.info(f"Found {len(products)} API products in {self.org}")
        return products

    def get_product(self, name: str) -> ApiProduct:
        """Get API product details, including operation groups"""
        return self._cached(
            f"product/{name}",
            lambda: ApiProduct(**self._make_request("GET", f"apiproducts/{name}"))
        )

    def list_proxies(self) -> List[ApiProxy]:
        """List all API proxies"""
        return self._cached(
            "proxies",
            lambda: [ApiProxy(**p) for p in self._make_request("GET", "apis").get("proxies", [])]
        )

    def list_deployments(self) -> List[Deployment]:
        """List proxy deployments across all environments"""
        return self._cached(
            "deployments",
            lambda: [Deployment(**d) for d in self._make_request("GET", "deployments").get("deployments", [])]
        )

    def list_envgroups(self) -> List[EnvironmentGroup]:
        """List environment groups"""
        return self._cached(
            "envgroups",
            lambda: [EnvironmentGroup(**g) for g in self._list_pages("envgroups", "environmentGroups")]
        )

    def list_envgroup_attachments(self, group: str) -> List[EnvironmentGroupAttachment]:
        """List the environments attached to an environment group"""
        return self._cached(
            f"attachments/{group}",
            lambda: [
                EnvironmentGroupAttachment(**a)
                for a in self._list_pages(f"envgroups/{group}/attachments", "environmentGroupAttachments")
            ]
        )

    def environment_map(self) -> EnvironmentMap:
        """Build the environment/hostname/envgroup index"""
        return self._cached(
            "envmap",
            lambda: EnvironmentMap.build(
                self.org,
                [(g, self.list_envgroup_attachments(g.name)) for g in self.list_envgroups()]
            )
        )

    def proxy_console_url(self, proxy: Optional[ApiProxy]) -> str:
        """Cloud console page of a proxy, or an empty string for an unknown proxy"""
        if proxy is None:
            return ""
        return CONSOLE_URL.format(proxy=proxy.name, org=self.org)
