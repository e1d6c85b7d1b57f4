"""Integration tests for the HTTP endpoints."""
from __future__ import annotations

import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import PHOTOS_URL, RecordingTransport, make_photo
from photo_carousel.main import create_app

FIVE_PHOTOS = [make_photo(index) for index in range(5)]


@pytest.fixture
def upstream(json_transport) -> RecordingTransport:
    return json_transport(FIVE_PHOTOS)


@pytest.fixture
def client(settings, upstream):
    with TestClient(create_app(settings, transport=upstream)) as test_client:
        yield test_client


class TestPhotosEndpoint:
    def test_defaults_return_whole_small_list(self, client, upstream):
        response = client.get("/api/photos")

        assert response.status_code == 200
        assert response.json() == {"photos": FIVE_PHOTOS}
        assert response.headers["Cache-Control"] == "public, max-age=3600"
        assert str(upstream.requests[0].url) == PHOTOS_URL

    def test_offset_and_limit_slice_the_list(self, client):
        response = client.get("/api/photos", params={"offset": "2", "limit": "1"})

        assert response.status_code == 200
        assert response.json() == {"photos": [FIVE_PHOTOS[2]]}

    def test_offset_past_end_is_empty_success(self, client):
        response = client.get("/api/photos", params={"offset": "10"})

        assert response.status_code == 200
        assert response.json() == {"photos": []}

    def test_album_ids_are_forwarded_upstream(self, client, upstream):
        response = client.get("/api/photos?albumId=1&albumId=5")

        assert response.status_code == 200
        assert str(upstream.requests[0].url) == f"{PHOTOS_URL}?albumId=1&albumId=5"

    def test_comma_joined_album_ids_are_forwarded_upstream(self, client, upstream):
        client.get("/api/photos", params={"albumId": "2,,3"})

        assert str(upstream.requests[0].url) == f"{PHOTOS_URL}?albumId=2&albumId=3"

    def test_limit_over_maximum_is_client_error(self, client, upstream):
        response = client.get("/api/photos", params={"limit": "500"})

        assert response.status_code == 400
        errors = response.json()["validationErrors"]
        assert [error["elementId"] for error in errors] == ["limit"]
        assert set(errors[0]) == {"message", "elementId"}
        assert "Cache-Control" not in response.headers
        assert upstream.requests == []

    def test_every_invalid_field_is_reported(self, client):
        response = client.get("/api/photos?albumId=abc&offset=-1&limit=x")

        assert response.status_code == 400
        assert [error["elementId"] for error in response.json()["validationErrors"]] == [
            "albumId",
            "offset",
            "limit",
        ]

    def test_non_get_is_rejected(self, client, upstream):
        response = client.post("/api/photos")

        assert response.status_code == 405
        assert response.content == b""
        assert response.headers["Allow"] == "GET"
        assert upstream.requests == []

    @pytest.mark.parametrize("method", ["PUT", "DELETE", "TRACE", "PROPFIND"])
    def test_any_non_get_method_gets_an_empty_405(self, client, upstream, method):
        response = client.request(method, "/api/photos")

        assert response.status_code == 405
        assert response.content == b""
        assert response.headers["Allow"] == "GET"
        assert upstream.requests == []

    def test_other_paths_keep_default_error_bodies(self, client):
        assert client.post("/health").json() == {"detail": "Method Not Allowed"}
        assert client.get("/api/missing").status_code == 404

    def test_overlong_offset_is_client_error(self, client, upstream):
        response = client.get("/api/photos", params={"offset": "1" * 5000})

        assert response.status_code == 400
        assert [error["elementId"] for error in response.json()["validationErrors"]] == ["offset"]
        assert upstream.requests == []

    def test_overlong_album_id_is_forwarded_upstream(self, client, upstream):
        album_id = "1" * 5000

        response = client.get("/api/photos", params={"albumId": album_id})

        assert response.status_code == 200
        assert str(upstream.requests[0].url) == f"{PHOTOS_URL}?albumId={album_id}"


class TestUpstreamFailures:
    @pytest.mark.parametrize(
        ("transport", "kind"),
        [
            (httpx.MockTransport(lambda request: httpx.Response(500)), "RequestFailed"),
            (httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>")), "RequestFailed"),
            (httpx.MockTransport(lambda request: httpx.Response(200, json={"photos": []})), "BadPhotoResponse"),
            (httpx.MockTransport(lambda request: httpx.Response(200, json=[])), "NoPhotosFound"),
        ],
    )
    def test_failures_become_opaque_server_errors(self, settings, transport, kind, caplog):
        with TestClient(create_app(settings, transport=transport)) as client:
            with caplog.at_level(logging.ERROR, logger="photo_carousel.handler"):
                response = client.get("/api/photos", params={"albumId": "4", "limit": "3"})

        assert response.status_code == 500
        assert response.json() == {"error": f"An unexpected error occurred: {kind}"}
        records = [record for record in caplog.records if record.name == "photo_carousel.handler"]
        assert len(records) == 1
        assert kind in records[0].getMessage()
        assert "albumId=4" in records[0].getMessage()

    def test_transport_error_is_server_error(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("kaboom")

        with TestClient(create_app(settings, transport=httpx.MockTransport(handler))) as client:
            response = client.get("/api/photos")

        assert response.status_code == 500
        assert response.json() == {"error": "An unexpected error occurred: RequestFailed"}

    def test_empty_upstream_can_be_a_normal_result(self, lenient_settings, json_transport):
        with TestClient(create_app(lenient_settings, transport=json_transport([]))) as client:
            response = client.get("/api/photos")

        assert response.status_code == 200
        assert response.json() == {"photos": []}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["environment"] == "test"
    assert data["upstream_url"] == PHOTOS_URL
