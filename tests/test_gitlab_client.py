import json

import httpx
import pytest

from gitlabctl.core.exceptions import GitLabAPIError
from gitlabctl.services.gitlab_client import GitLabClient


def make_client(handler):
    return GitLabClient(
        "https://gitlab.example.com/api/v4/",
        "secret-token",
        transport=httpx.MockTransport(handler),
    )


def test_token_header_and_pagination_params():
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json=[{"id": 1, "is_shared": False}])

    with make_client(handler) as client:
        runners = client.list_group_runners("111", "online")

    request = seen["request"]
    assert request.headers["PRIVATE-TOKEN"] == "secret-token"
    assert request.url.path == "/api/v4/groups/111/runners"
    assert request.url.params["status"] == "online"
    assert request.url.params["per_page"] == "100"
    assert request.url.params["page"] == "1"
    assert runners == [{"id": 1, "is_shared": False}]


def test_status_param_omitted_when_not_given():
    def handler(request):
        assert "status" not in request.url.params
        return httpx.Response(200, json=[])

    with make_client(handler) as client:
        assert client.list_runner_jobs(5) == []


def test_search_groups_passes_search():
    def handler(request):
        assert request.url.path == "/api/v4/groups"
        assert request.url.params["search"] == "platform"
        return httpx.Response(200, json=[{"id": 7, "name": "platform"}])

    with make_client(handler) as client:
        assert client.search_groups("platform") == [{"id": 7, "name": "platform"}]


def test_get_runner_returns_detail():
    def handler(request):
        assert request.url.path == "/api/v4/runners/42"
        return httpx.Response(200, json={"id": 42, "tag_list": ["docker"]})

    with make_client(handler) as client:
        assert client.get_runner(42)["tag_list"] == ["docker"]


def test_delete_runner_accepts_empty_body():
    def handler(request):
        assert request.method == "DELETE"
        assert request.url.path == "/api/v4/runners/9"
        return httpx.Response(204)

    with make_client(handler) as client:
        assert client.delete_runner(9) is None


def test_http_error_raises_api_error():
    def handler(request):
        return httpx.Response(403, json={"message": "403 Forbidden"})

    with make_client(handler) as client:
        with pytest.raises(GitLabAPIError) as exc_info:
            client.get_runner(1)

    err = exc_info.value
    assert err.status_code == 403
    assert err.exit_code == 10
    assert "Forbidden" in str(err)


def test_transport_error_raises_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with make_client(handler) as client:
        with pytest.raises(GitLabAPIError) as exc_info:
            client.search_groups()

    assert exc_info.value.status_code is None
    assert "connection refused" in str(exc_info.value)


def test_invalid_json_raises_api_error():
    def handler(request):
        return httpx.Response(200, content=b"<html>not json</html>")

    with make_client(handler) as client:
        with pytest.raises(GitLabAPIError, match="Invalid JSON"):
            client.search_groups()


def test_list_endpoint_rejects_non_array():
    def handler(request):
        return httpx.Response(200, content=json.dumps({"message": "oops"}).encode())

    with make_client(handler) as client:
        with pytest.raises(GitLabAPIError, match="JSON array"):
            client.list_group_runners("1")
