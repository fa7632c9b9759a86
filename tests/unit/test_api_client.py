"""Unit tests for ApiClient."""

from unittest.mock import Mock, patch

import pytest
import requests

from udyami.api_client import ApiClient
from udyami.api_client.api_client import convert_keys, to_camel_case, to_snake_case


def make_response(status_code=200, payload=None, content=b"{}"):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = "OK" if response.ok else "Error"
    response.content = content
    response.json.return_value = payload
    return response


@pytest.fixture
def api_client():
    """ApiClient pointed at a local test URL."""
    return ApiClient(base_url="http://localhost:3001/api/", timeout=5)


class TestKeyConversion:
    """Tests for camelCase/snake_case conversion."""

    def test_to_camel_case(self):
        assert to_camel_case("phone_number") == "phoneNumber"
        assert to_camel_case("id") == "id"

    def test_to_snake_case(self):
        assert to_snake_case("buyerId") == "buyer_id"
        assert to_snake_case("createdAt") == "created_at"

    def test_convert_keys_is_recursive(self):
        value = {"sellerId": 1, "items": [{"postedAt": "x"}]}
        assert convert_keys(value, to_snake_case) == {"seller_id": 1, "items": [{"posted_at": "x"}]}


class TestApiClient:
    """Test cases for ApiClient."""

    def test_init_strips_trailing_slash(self, api_client):
        assert api_client.base_url == "http://localhost:3001/api"

    def test_init_requires_base_url(self):
        with pytest.raises(ValueError, match="Base URL is required"):
            ApiClient(base_url="")

    def test_create_job_sends_camel_case_and_returns_id(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(201, {"data": {"id": 42, "buyerId": "b1"}})

            result = api_client.create_job({"title": "Fix tap", "buyer_id": "b1"})

        assert result == "42"
        args, kwargs = mock_request.call_args
        assert args == ("POST", "http://localhost:3001/api/jobs")
        assert kwargs["json"] == {"title": "Fix tap", "buyerId": "b1"}
        assert kwargs["timeout"] == 5

    def test_create_without_id_returns_none(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(201, {"status": "ok"})
            assert api_client.create_user({"name": "Amit"}) is None

    def test_get_jobs_unwraps_and_converts(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(
                200, [{"id": 1, "buyerId": "b1", "postedAt": "2024-03-01"}]
            )

            result = api_client.get_jobs({"buyer_id": "b1"})

        assert result == [{"id": 1, "buyer_id": "b1", "posted_at": "2024-03-01"}]
        assert mock_request.call_args.kwargs["params"] == {"buyerId": "b1"}

    def test_empty_list_is_not_a_failure(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(200, [])
            assert api_client.get_services() == []

    def test_non_list_for_list_endpoint_returns_none(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(200, {"error": "oops"})
            assert api_client.get_sellers() is None

    def test_non_2xx_returns_none(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(500, {"error": "Failed"})
            assert api_client.get_user("u1") is None

    def test_transport_error_returns_none(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.side_effect = requests.ConnectionError("refused")
            assert api_client.get_user_by_phone("919876543210") is None

    def test_timeout_returns_none(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.side_effect = requests.Timeout("slow")
            assert api_client.create_job({"title": "x"}) is None

    def test_invalid_json_returns_none(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            response = make_response(200, content=b"<html>")
            response.json.side_effect = ValueError("not json")
            mock_request.return_value = response
            assert api_client.get_all_data() is None

    def test_empty_body_success_returns_empty_dict(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(204, content=b"")
            assert api_client.clear_all_data() == {}

    def test_unfollow_uses_delete_with_body(self, api_client):
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(200, {"success": True})

            api_client.unfollow_seller("s1", "b1")

        args, kwargs = mock_request.call_args
        assert args == ("DELETE", "http://localhost:3001/api/follows")
        assert kwargs["json"] == {"sellerId": "s1", "followerId": "b1"}

    def test_routes(self, api_client):
        """Path-parameter routes hit the backend's paths."""
        with patch.object(api_client.session, "request") as mock_request:
            mock_request.return_value = make_response(200, [])

            api_client.get_jobs_by_user("u1")
            api_client.get_services_by_seller("s1")
            api_client.get_followed_sellers("u1")
            api_client.get_notifications("u1")

        urls = [c.args[1] for c in mock_request.call_args_list]
        assert urls == [
            "http://localhost:3001/api/jobs/user/u1",
            "http://localhost:3001/api/services/seller/s1",
            "http://localhost:3001/api/follows/user/u1",
            "http://localhost:3001/api/notifications/user/u1",
        ]


class TestHealthCheck:
    """Tests for the health probe."""

    def test_health_check_success(self, api_client):
        with patch.object(api_client.session, "get") as mock_get:
            mock_get.return_value = make_response(200)
            assert api_client.health_check() is True
        mock_get.assert_called_once_with("http://localhost:3001/api/", timeout=5)

    def test_health_check_non_2xx(self, api_client):
        with patch.object(api_client.session, "get") as mock_get:
            mock_get.return_value = make_response(503)
            assert api_client.health_check() is False

    def test_health_check_connection_error(self, api_client):
        with patch.object(api_client.session, "get") as mock_get:
            mock_get.side_effect = requests.ConnectionError("refused")
            assert api_client.health_check() is False
