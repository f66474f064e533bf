"""Tests for the NuGet registry client — no network (httpx.MockTransport)."""

from __future__ import annotations

import httpx

from nuget_inspector.models import PackageId
from nuget_inspector.nuget.search import NugetSearchService

INDEX_URL = "https://feed.example/v3/index.json"
REGISTRATION = "https://feed.example/v3/registration/"


def _service(routes: dict[str, object], calls: list[str] | None = None) -> NugetSearchService:
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        if url not in routes:
            return httpx.Response(404)
        return httpx.Response(200, json=routes[url])

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return NugetSearchService(INDEX_URL, client=client)


INDEX = {
    "resources": [
        {"@type": "SearchQueryService", "@id": "https://feed.example/query"},
        {"@type": "RegistrationsBaseUrl/3.6.0", "@id": REGISTRATION},
    ]
}


class TestNugetSearchService:
    def test_inline_catalog_entry(self):
        routes = {
            INDEX_URL: INDEX,
            f"{REGISTRATION}serilog.sinks.file/5.0.0.json": {
                "catalogEntry": {
                    "dependencyGroups": [
                        {
                            "targetFramework": "net5.0",
                            "dependencies": [{"id": "Serilog", "range": "[2.10.0, )"}],
                        },
                        {"targetFramework": "netstandard2.0"},
                    ]
                }
            },
        }
        with _service(routes) as service:
            deps = service.find_dependencies(PackageId("Serilog.Sinks.File", "5.0.0"))
        assert deps == {PackageId("Serilog", "2.10.0")}

    def test_catalog_entry_url_followed(self):
        catalog = "https://feed.example/catalog/dapper.2.1.0.json"
        routes = {
            INDEX_URL: INDEX,
            f"{REGISTRATION}dapper/2.1.0.json": {"catalogEntry": catalog},
            catalog: {"dependencyGroups": []},
        }
        with _service(routes) as service:
            assert service.find_dependencies(PackageId("Dapper", "2.1.0")) == frozenset()

    def test_results_are_cached(self):
        calls: list[str] = []
        routes = {
            INDEX_URL: INDEX,
            f"{REGISTRATION}dapper/2.1.0.json": {"catalogEntry": {}},
        }
        with _service(routes, calls) as service:
            service.find_dependencies(PackageId("Dapper", "2.1.0"))
            service.find_dependencies(PackageId("dapper", "2.1.0"))
        assert calls.count(f"{REGISTRATION}dapper/2.1.0.json") == 1
        assert calls.count(INDEX_URL) == 1

    def test_http_error_returns_none(self):
        with _service({INDEX_URL: INDEX}) as service:
            assert service.find_dependencies(PackageId("Missing", "1.0.0")) is None

    def test_index_without_registration_returns_none(self):
        with _service({INDEX_URL: {"resources": []}}) as service:
            assert service.find_dependencies(PackageId("Dapper", "2.1.0")) is None

    def test_unknown_version_skips_lookup(self):
        calls: list[str] = []
        with _service({}, calls) as service:
            assert service.find_dependencies(PackageId("Dapper")) is None
        assert calls == []

    def test_malformed_dependency_groups_are_skipped(self):
        routes = {
            INDEX_URL: INDEX,
            f"{REGISTRATION}polly/8.0.0.json": {
                "catalogEntry": {
                    "dependencyGroups": [
                        "net8.0",
                        {"dependencies": ["Polly.Core", {"id": "Polly.Core", "range": "8.0.0"}]},
                    ]
                }
            },
        }
        with _service(routes) as service:
            deps = service.find_dependencies(PackageId("Polly", "8.0.0"))
        assert deps == {PackageId("Polly.Core", "8.0.0")}

    def test_malformed_payload_returns_none(self):
        routes = {
            INDEX_URL: {"resources": ["RegistrationsBaseUrl/3.6.0"]},
        }
        with _service(routes) as service:
            assert service.find_dependencies(PackageId("Polly", "8.0.0")) is None

        routes = {
            INDEX_URL: INDEX,
            f"{REGISTRATION}polly/8.0.0.json": {"catalogEntry": {"dependencyGroups": 3}},
        }
        with _service(routes) as service:
            assert service.find_dependencies(PackageId("Polly", "8.0.0")) is None
