from __future__ import annotations

import threading
from unittest.mock import MagicMock, patch

import pytest
import requests

from express_starter.registry_client import Dependency, RegistryClient, RegistryError


def _response(status: int = 200, payload=None, *, text: str = "") -> MagicMock:
    r = MagicMock()
    r.status_code = status
    r.text = text
    if isinstance(payload, Exception):
        r.json.side_effect = payload
    else:
        r.json.return_value = payload
    return r


def _metadata(name: str, latest: str) -> dict:
    return {"name": name, "dist-tags": {"latest": latest, "next": "99.0.0-rc.1"}}


def test_latest_version_reads_dist_tags() -> None:
    client = RegistryClient("https://registry.example.test/")
    with patch("express_starter.registry_client.requests.request") as req:
        req.return_value = _response(payload=_metadata("express", "4.18.0"))
        dep = client.latest_version("express")

    assert dep == Dependency(name="express", version="4.18.0")
    method, url = req.call_args.args
    assert method == "GET"
    assert url == "https://registry.example.test/express"
    assert req.call_args.kwargs["timeout"] is None


def test_scoped_package_name_is_quoted() -> None:
    client = RegistryClient(timeout=5)
    with patch("express_starter.registry_client.requests.request") as req:
        req.return_value = _response(payload=_metadata("@types/express", "4.17.21"))
        client.latest_version("@types/express")

    assert req.call_args.args[1] == "https://registry.npmjs.org/@types%2Fexpress"
    assert req.call_args.kwargs["timeout"] == 5


def test_missing_name_falls_back_to_requested_name() -> None:
    client = RegistryClient()
    with patch("express_starter.registry_client.requests.request") as req:
        req.return_value = _response(payload={"dist-tags": {"latest": "2.8.5"}})
        assert client.latest_version("cors") == Dependency(name="cors", version="2.8.5")


@pytest.mark.parametrize(
    "response",
    [
        _response(404, {"error": "Not found"}),
        _response(500, ValueError("no json"), text="Internal Server Error"),
        _response(200, ValueError("no json"), text="<html>"),
        _response(200, {"name": "express"}),
        _response(200, {"name": "express", "dist-tags": {}}),
        _response(200, ["not", "a", "mapping"]),
    ],
)
def test_latest_version_errors(response: MagicMock) -> None:
    client = RegistryClient()
    with patch("express_starter.registry_client.requests.request", return_value=response):
        with pytest.raises(RegistryError):
            client.latest_version("express")


def test_transport_failure_is_wrapped() -> None:
    client = RegistryClient()
    with patch(
        "express_starter.registry_client.requests.request",
        side_effect=requests.ConnectionError("unreachable"),
    ):
        with pytest.raises(RegistryError, match="unreachable"):
            client.latest_version("express")


def test_empty_registry_url_is_rejected() -> None:
    with pytest.raises(RegistryError):
        RegistryClient("  ")


def test_resolve_all_keeps_request_order() -> None:
    versions = {"express": "4.18.0", "cors": "2.8.5", "dotenv": "16.0.0"}

    def fake_request(method, url, **kwargs):
        name = url.rsplit("/", 1)[1]
        return _response(payload=_metadata(name, versions[name]))

    client = RegistryClient()
    with patch("express_starter.registry_client.requests.request", side_effect=fake_request):
        deps = client.resolve_all(["express", "cors", "dotenv"])

    assert deps == [
        Dependency("express", "4.18.0"),
        Dependency("cors", "2.8.5"),
        Dependency("dotenv", "16.0.0"),
    ]


def test_resolve_all_fails_when_any_lookup_fails() -> None:
    def fake_request(method, url, **kwargs):
        name = url.rsplit("/", 1)[1]
        if name == "cors":
            return _response(503, {"error": "unavailable"})
        return _response(payload=_metadata(name, "1.0.0"))

    client = RegistryClient()
    with patch("express_starter.registry_client.requests.request", side_effect=fake_request):
        with pytest.raises(RegistryError, match="cors"):
            client.resolve_all(["express", "cors", "dotenv"])


def test_resolve_all_empty_batch_makes_no_requests() -> None:
    client = RegistryClient()
    with patch("express_starter.registry_client.requests.request") as req:
        assert client.resolve_all([]) == []
    req.assert_not_called()


@pytest.mark.parametrize("timeout", [0, -1.5])
def test_non_positive_timeout_is_rejected(timeout: float) -> None:
    with pytest.raises(RegistryError):
        RegistryClient(timeout=timeout)


def test_resolve_all_runs_lookups_concurrently() -> None:
    names = ["express", "cors", "dotenv"]
    # Every lookup blocks until all of them are in flight at once.
    barrier = threading.Barrier(len(names), timeout=5)

    def fake_request(method, url, **kwargs):
        barrier.wait()
        name = url.rsplit("/", 1)[1]
        return _response(payload=_metadata(name, "1.0.0"))

    client = RegistryClient()
    with patch("express_starter.registry_client.requests.request", side_effect=fake_request):
        deps = client.resolve_all(names)

    assert [d.name for d in deps] == names
