import json

import httpx
import pytest

from linkscrap.core.config import Settings
from linkscrap.core.errors import BrightDataError, ConfigurationError
from linkscrap.services.brightdata import BrightDataClient

BASE_URL = "https://api.brightdata.com/datasets/v3/trigger"


def make_client(handler, api_key="k"):
    return BrightDataClient(api_key=api_key, base_url=BASE_URL, transport=httpx.MockTransport(handler))


def test_trigger_sends_dataset_params_and_bearer_token():
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json={"snapshot_id": "s_1"})

    payload = [{"first_name": "Jane", "last_name": "Doe"}]
    result = make_client(handler).trigger("gd_1", payload, type="discover_new", discover_by="name")

    req = seen["request"]
    assert result == {"snapshot_id": "s_1"}
    assert req.method == "POST"
    assert req.url.path == "/datasets/v3/trigger"
    assert req.url.params["dataset_id"] == "gd_1"
    assert req.url.params["include_errors"] == "true"
    assert req.url.params["type"] == "discover_new"
    assert req.url.params["discover_by"] == "name"
    assert req.headers["Authorization"] == "Bearer k"
    assert json.loads(req.content) == payload


def test_collect_trigger_has_no_discovery_params():
    seen = {}

    def handler(request):
        seen["params"] = request.url.params
        return httpx.Response(200, json={"snapshot_id": "s_1"})

    make_client(handler).trigger("gd_1", [{"url": "https://www.linkedin.com/in/jane"}])
    assert "type" not in seen["params"]
    assert "discover_by" not in seen["params"]


def test_progress_and_download_use_api_root():
    paths = []

    def handler(request):
        paths.append((request.url.path, dict(request.url.params)))
        if "/progress/" in request.url.path:
            return httpx.Response(200, json={"status": "ready"})
        return httpx.Response(200, json=[{"id": "1"}])

    client = make_client(handler)
    assert client.monitor_progress("s_1") == {"status": "ready"}
    assert client.download_snapshot("s_1") == [{"id": "1"}]
    assert paths == [
        ("/datasets/v3/progress/s_1", {}),
        ("/datasets/v3/snapshot/s_1", {"format": "json"}),
    ]


def test_missing_api_key_fails_before_any_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(ConfigurationError):
        make_client(handler, api_key="").trigger("gd_1", [])
    with pytest.raises(ConfigurationError):
        make_client(handler, api_key="").monitor_progress("s_1")
    assert calls == []


def test_missing_dataset_id_is_a_configuration_error():
    client = make_client(lambda request: httpx.Response(200, json={}))
    with pytest.raises(ConfigurationError):
        client.trigger("", [{"url": "https://www.linkedin.com/in/jane"}])


@pytest.mark.parametrize("status, transient", [(500, True), (503, True), (429, True), (400, False), (401, False)])
def test_http_errors_map_to_brightdata_error(status, transient):
    client = make_client(lambda request: httpx.Response(status, text="nope"))
    with pytest.raises(BrightDataError) as info:
        client.monitor_progress("s_1")
    assert info.value.upstream_status == status
    assert info.value.transient is transient
    assert info.value.status_code == 502


def test_network_errors_are_transient():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BrightDataError) as info:
        make_client(handler).trigger("gd_1", [])
    assert info.value.transient is True
    assert info.value.upstream_status is None


def test_non_json_body_is_returned_as_text():
    client = make_client(lambda request: httpx.Response(200, text="queued"))
    assert client.trigger("gd_1", []) == "queued"


def test_progress_must_be_an_object():
    client = make_client(lambda request: httpx.Response(200, json=["ready"]))
    with pytest.raises(BrightDataError):
        client.monitor_progress("s_1")


def test_from_settings_derives_api_root():
    cfg = Settings(brightdata_api_key="k", brightdata_base_url="https://example.test/datasets/v3/trigger")
    client = BrightDataClient.from_settings(cfg)
    assert cfg.brightdata_api_root == "https://example.test/datasets/v3"
    assert client.api_root == "https://example.test/datasets/v3"
    assert client.base_url == "https://example.test/datasets/v3/trigger"
