"""Tests for the stream lifecycle webhook endpoints."""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient

from app.api.errors import app_error_handler
from app.api.webhooks.stream import router
from app.domain.live.stream.stream_domain import StreamService, get_stream_service
from app.main import HTTPLoggingMiddleware
from app.shared.api.utils import validation_exception_handler
from app.utils.app_errors import AppError
from tests.fixtures.stream_fixtures import TEST_CDN, FakeRegistry, FakeStreamStore, RecordingHandler


@pytest.fixture
def test_app(stream_service: StreamService) -> FastAPI:
    app = FastAPI()
    app.add_middleware(HTTPLoggingMiddleware)
    app.dependency_overrides[get_stream_service] = lambda: stream_service
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.include_router(router)
    return app


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    return TestClient(test_app, raise_server_exceptions=False)


class TestLiveWebhook:
    def test_publish(self, client: TestClient, fake_store: FakeStreamStore, fake_registry: FakeRegistry):
        response = client.post("/webhooks/stream/live", json={"channel_id": "abc123", "is_live": True})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["results"] == {
            "channel_id": "abc123",
            "live": True,
            "url": f"https://{TEST_CDN}/hls/abc123/index.m3u8",
            "thumbnail": f"https://{TEST_CDN}/preview/abc123.jpg",
        }
        assert fake_store.records["abc123"]["live"] is True
        assert fake_registry.calls == [("add", "abc123")]

    def test_camel_case_body(self, client: TestClient, fake_store: FakeStreamStore):
        response = client.post("/webhooks/stream/live", json={"channelId": "abc123", "isLive": False})

        assert response.status_code == 200
        assert fake_store.records["abc123"]["live"] is False

    def test_missing_channel_id(self, client: TestClient):
        response = client.post("/webhooks/stream/live", json={"is_live": True})

        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_store_failure_returns_500(
        self, client: TestClient, fake_store: FakeStreamStore, fake_registry: FakeRegistry
    ):
        fake_store.fail_with = TimeoutError("store unavailable")

        response = client.post("/webhooks/stream/live", json={"channel_id": "abc123", "is_live": True})

        assert response.status_code == 500
        assert response.json()["errcode"] == "E_INTERNAL_ERROR"
        assert fake_registry.calls == []


class TestTranscodeWebhook:
    def test_transcode_known_channel(self, client: TestClient, fake_store: FakeStreamStore):
        client.post("/webhooks/stream/live", json={"channel_id": "abc123", "is_live": True})

        response = client.post(
            "/webhooks/stream/transcode",
            json={"channel_id": "abc123", "transcoded": True, "location": "transcode_480"},
        )

        assert response.status_code == 200
        results = response.json()["results"]
        assert results["updated"] is True
        assert results["url"] == f"https://{TEST_CDN}/transcode_480/abc123.m3u8"
        assert fake_store.records["abc123"]["url"] == results["url"]

    def test_transcode_unknown_channel(self, client: TestClient, fake_store: FakeStreamStore):
        response = client.post(
            "/webhooks/stream/transcode",
            json={"channel_id": "nobody", "transcoded": True, "location": "transcode_480"},
        )

        assert response.status_code == 200
        assert response.json()["results"] == {"updated": False, "channel_id": "nobody", "url": None}
        assert fake_store.records == {}

    def test_store_failure_returns_500(self, client: TestClient, fake_store: FakeStreamStore):
        client.post("/webhooks/stream/live", json={"channel_id": "abc123", "is_live": True})
        fake_store.fail_writes_with = TimeoutError("store unavailable")

        response = client.post(
            "/webhooks/stream/transcode",
            json={"channel_id": "abc123", "transcoded": True, "location": "transcode_480"},
        )

        assert response.status_code == 500
        assert response.json()["errcode"] == "E_INTERNAL_ERROR"
        assert fake_store.records["abc123"]["url"] == f"https://{TEST_CDN}/hls/abc123/index.m3u8"


class TestArchiveWebhooks:
    def test_check_unknown_channel(self, client: TestClient):
        response = client.post("/webhooks/stream/archive/check", json={"channel_id": "nobody"})

        assert response.status_code == 200
        assert response.json()["results"] == {"archive": False}

    def test_check_enabled(self, client: TestClient, fake_store: FakeStreamStore):
        client.post("/webhooks/stream/live", json={"channel_id": "abc123", "is_live": True})
        fake_store.records["abc123"]["archive"] = True

        response = client.post("/webhooks/stream/archive/check", json={"channel_id": "abc123"})

        assert response.json()["results"] == {"archive": True}

    def test_save(self, client: TestClient, archive_handler: RecordingHandler):
        response = client.post(
            "/webhooks/stream/archive/save",
            json={
                "channel_id": "abc123",
                "location": "archives/abc123/1.mp4",
                "duration": 3600,
                "thumbnails": ["t0.jpg"],
            },
        )

        assert response.status_code == 200
        assert response.json()["results"] == {"reported": True}
        assert len(archive_handler.requests) == 1

    def test_save_archive_api_down(self, client: TestClient, archive_handler: RecordingHandler):
        archive_handler.response = httpx.ConnectError("connection refused")

        response = client.post(
            "/webhooks/stream/archive/save",
            json={"channel_id": "abc123", "location": "loc", "duration": 1},
        )

        assert response.status_code == 200
        assert response.json()["results"] == {"reported": False}

    def test_save_negative_duration(self, client: TestClient):
        response = client.post(
            "/webhooks/stream/archive/save",
            json={"channel_id": "abc123", "location": "loc", "duration": -1},
        )

        assert response.status_code == 422


class TestSignatureWebhook:
    BODY = {
        "channel_id": "abc123",
        "data_hex": "deadbeef",
        "signature": "cafe",
        "signature_ts": "1700000000",
    }

    def test_valid(self, client: TestClient):
        response = client.post("/webhooks/stream/signature/verify", json=self.BODY)

        assert response.status_code == 200
        assert response.json()["results"] == {"valid": True, "outcome": "valid"}

    def test_rejected(self, client: TestClient, signature_handler: RecordingHandler):
        signature_handler.response = httpx.Response(200, json={"error": {"message": "bad signature"}})

        response = client.post("/webhooks/stream/signature/verify", json=self.BODY)

        assert response.json()["results"] == {"valid": False, "outcome": "invalid"}

    def test_service_unavailable(self, client: TestClient, signature_handler: RecordingHandler):
        signature_handler.response = httpx.ReadTimeout("timed out")

        response = client.post("/webhooks/stream/signature/verify", json=self.BODY)

        assert response.status_code == 200
        assert response.json()["results"] == {"valid": False, "outcome": "unavailable"}
