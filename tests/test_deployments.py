"""Tests for resolving deployments onto product APIs."""

from conftest import FakeApigeeClient, envgroup

from discovery.deployments import DeploymentResolver
from discovery.environment_map import EnvironmentMap
from models.apigee_models import Deployment
from models.registry_models import Api, ApiData, Metadata


def make_api(name):
    return Api(api_version="apigeeregistry/v1", kind="API", metadata=Metadata(name=name),
               data=ApiData(display_name=name))


def make_resolver(export_logger, envgroups=None, deployments=None):
    client = FakeApigeeClient(envgroups=envgroups or [], deployments=deployments or [])
    return client, DeploymentResolver(client, export_logger)


class TestAddDeployments:
    """add_deployments fetches only when some product binds a proxy."""

    def test_empty_index_fetches_nothing(self, export_logger):
        client, resolver = make_resolver(export_logger)
        assert resolver.add_deployments({}) == 0
        assert client.calls == []

    def test_fetches_map_and_deployments(self, export_logger):
        api = make_api("p")
        client, resolver = make_resolver(
            export_logger,
            envgroups=[envgroup("g", ["h.example.com"], ["test"])],
            deployments=[Deployment(api_proxy="hello", revision="1", environment="test")],
        )
        assert resolver.add_deployments({"hello": [api]}) == 1
        assert client.calls == ["environment_map", "list_deployments"]
        assert len(api.data.deployments) == 1


class TestAttachDeployments:
    """Deployments fan out over hostnames and owning APIs."""

    def test_deployment_fields(self, export_logger):
        api = make_api("p")
        _, resolver = make_resolver(export_logger)
        env_map = EnvironmentMap.build("myorg", [envgroup("g", ["api.example.com"], ["test"])])
        dep = Deployment(api_proxy="hello", revision="3", environment="test")

        resolver.attach_deployments([dep], env_map, {"hello": [api]})

        deployment = api.data.deployments[0]
        assert deployment.kind == "Deployment"
        assert deployment.metadata.name == "api-example-com"
        assert deployment.metadata.annotations == {
            "apigee-proxy-revision": "organizations/myorg/apis/hello/revisions/3",
            "apigee-environment": "organizations/myorg/environments/test",
            "apigee-envgroup": "organizations/myorg/envgroups/g",
        }
        assert deployment.data.display_name == "test (api.example.com)"
        assert deployment.data.endpoint_uri == "https://api.example.com/hello"

    def test_unknown_environment_warns_and_skips(self, export_logger):
        api = make_api("p")
        _, resolver = make_resolver(export_logger)
        env_map = EnvironmentMap.build("myorg", [envgroup("g", ["api.example.com"], ["test"])])
        dep = Deployment(api_proxy="hello", revision="1", environment="prod")

        assert resolver.attach_deployments([dep], env_map, {"hello": [api]}) == 0
        assert api.data.deployments == []
        assert len(export_logger.get_warnings()) == 1
        assert "prod" in export_logger.get_warnings()[0]

    def test_unknown_proxy_warns_per_hostname(self, export_logger):
        api = make_api("p")
        _, resolver = make_resolver(export_logger)
        env_map = EnvironmentMap.build("myorg", [envgroup("g", ["a.example.com", "b.example.com"], ["test"])])
        dep = Deployment(api_proxy="other", revision="1", environment="test")

        assert resolver.attach_deployments([dep], env_map, {"hello": [api]}) == 0
        warnings = export_logger.get_warnings()
        assert len(warnings) == 2
        assert all("unknown product" in w for w in warnings)

    def test_proxy_bound_by_two_products(self, export_logger):
        first, second = make_api("first"), make_api("second")
        _, resolver = make_resolver(export_logger)
        env_map = EnvironmentMap.build("myorg", [envgroup("g", ["a.example.com", "b.example.com"], ["test"])])
        dep = Deployment(api_proxy="hello", revision="1", environment="test")

        assert resolver.attach_deployments([dep], env_map, {"hello": [first, second]}) == 4
        for api in (first, second):
            assert [d.metadata.name for d in api.data.deployments] == ["a-example-com", "b-example-com"]

    def test_hostname_without_envgroup(self, export_logger):
        api = make_api("p")
        _, resolver = make_resolver(export_logger)
        env_map = EnvironmentMap("myorg")
        env_map._hostnames["test"] = ["loose.example.com"]
        dep = Deployment(api_proxy="hello", revision="1", environment="test")

        resolver.attach_deployments([dep], env_map, {"hello": [api]})
        assert api.data.deployments[0].metadata.annotations["apigee-envgroup"] == ""
        assert export_logger.get_warnings() == []

    def test_repeated_deployments_are_not_deduplicated(self, export_logger):
        api = make_api("p")
        _, resolver = make_resolver(export_logger)
        env_map = EnvironmentMap.build("myorg", [envgroup("g", ["a.example.com"], ["test"])])
        deps = [
            Deployment(api_proxy="hello", revision="1", environment="test"),
            Deployment(api_proxy="hello", revision="2", environment="test"),
        ]

        assert resolver.attach_deployments(deps, env_map, {"hello": [api, api]}) == 4
        assert len(api.data.deployments) == 4
