"""In-memory collaborators for StreamService tests."""

from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from app.domain.live.stream.stream_domain import StreamService
from app.services.archive.archive_client import ArchiveClient
from app.services.signature.signature_client import SignatureClient

TEST_CDN = "cdn.test"
TEST_HOST = "ingest.test"
SIGNATURE_URL = "https://rpc.test/api/v2?m=verify.Signature"
ARCHIVE_URL = "https://archive.test/v1/archives"


class FakeStreamStore:
    """Dict-backed store with the same key normalization and merge semantics."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, Any]] = {}
        self.upserts: list[tuple[str, dict[str, Any]]] = []
        self.updates: list[tuple[str, dict[str, Any]]] = []
        self.fail_with: BaseException | None = None
        self.fail_writes_with: BaseException | None = None

    async def upsert(self, channel_id: str, fields: dict[str, Any]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        if self.fail_writes_with is not None:
            raise self.fail_writes_with
        key = channel_id.lower()
        self.upserts.append((key, dict(fields)))
        record = self.records.get(key) or {"channel_id": key, "archive": False}
        self.records[key] = {**record, **fields, "updated_at": datetime.now(timezone.utc)}

    async def update(self, channel_id: str, fields: dict[str, Any]) -> bool:
        if self.fail_with is not None:
            raise self.fail_with
        if self.fail_writes_with is not None:
            raise self.fail_writes_with
        key = channel_id.lower()
        self.updates.append((key, dict(fields)))
        if key not in self.records:
            return False
        self.records[key] = {**self.records[key], **fields, "updated_at": datetime.now(timezone.utc)}
        return True

    async def get(self, channel_id: str) -> SimpleNamespace | None:
        if self.fail_with is not None:
            raise self.fail_with
        record = self.records.get(channel_id.lower())
        return SimpleNamespace(**record) if record else None


class FakeRegistry:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.fail_with: BaseException | None = None

    async def add_streamer(self, channel_id: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(("add", channel_id))

    async def remove_streamer(self, channel_id: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(("remove", channel_id))


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays a response."""

    def __init__(self, response: httpx.Response | BaseException | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.response = response if response is not None else httpx.Response(200, text="OK")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, BaseException):
            raise self.response
        return self.response


@pytest.fixture
def fake_store() -> FakeStreamStore:
    return FakeStreamStore()


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def signature_handler() -> RecordingHandler:
    return RecordingHandler(httpx.Response(200, json={"result": {"is_valid": True}}))


@pytest.fixture
def archive_handler() -> RecordingHandler:
    return RecordingHandler(httpx.Response(200, json={"id": "archive_1"}))


@pytest.fixture
def stream_service(
    fake_store: FakeStreamStore,
    fake_registry: FakeRegistry,
    signature_handler: RecordingHandler,
    archive_handler: RecordingHandler,
) -> StreamService:
    return StreamService(
        store=fake_store,  # type: ignore[arg-type]
        registry=fake_registry,
        signature_client=SignatureClient(
            url=SIGNATURE_URL,
            timeout=1,
            transport=httpx.MockTransport(signature_handler),
        ),
        archive_client=ArchiveClient(
            url=ARCHIVE_URL,
            host_server=TEST_HOST,
            timeout=1,
            transport=httpx.MockTransport(archive_handler),
        ),
        cdn_server=TEST_CDN,
    )
