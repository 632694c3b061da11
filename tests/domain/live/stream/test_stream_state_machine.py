"""Tests for StreamStateMachine."""

from types import SimpleNamespace

from app.domain.live.stream.stream_state_machine import PlaybackMode, StreamState, StreamStateMachine
from app.domain.live.stream.stream_urls import direct_playback_url, transcoded_playback_url

CDN = "cdn.example.com"


def _record(live: bool, url: str, claim_id: str = "abc123") -> SimpleNamespace:
    return SimpleNamespace(claim_id=claim_id, live=live, url=url)


class TestDerivedState:
    def test_missing_record_is_unknown(self):
        assert StreamStateMachine.state_of(None) == StreamState.UNKNOWN

    def test_live_record(self):
        record = _record(True, direct_playback_url(CDN, "abc123"))
        assert StreamStateMachine.state_of(record) == StreamState.LIVE  # type: ignore[arg-type]

    def test_offline_record(self):
        record = _record(False, direct_playback_url(CDN, "abc123"))
        assert StreamStateMachine.state_of(record) == StreamState.OFFLINE  # type: ignore[arg-type]


class TestDerivedPlayback:
    def test_direct_playback(self):
        record = _record(True, direct_playback_url(CDN, "abc123"))
        assert StreamStateMachine.playback_of(record, CDN) == (PlaybackMode.DIRECT, None)  # type: ignore[arg-type]

    def test_transcoding_playback(self):
        record = _record(True, transcoded_playback_url(CDN, "transcode_480", "abc123"))
        assert StreamStateMachine.playback_of(record, CDN) == (  # type: ignore[arg-type]
            PlaybackMode.TRANSCODING,
            "transcode_480",
        )

    def test_transcoding_url_with_other_casing(self):
        record = _record(True, transcoded_playback_url(CDN, "transcode_480", "ABC123"), claim_id="abc123")
        assert StreamStateMachine.playback_of(record, CDN) == (  # type: ignore[arg-type]
            PlaybackMode.TRANSCODING,
            "transcode_480",
        )

    def test_direct_url_with_other_casing(self):
        record = _record(True, direct_playback_url(CDN, "ABC123"), claim_id="abc123")
        assert StreamStateMachine.playback_of(record, CDN) == (PlaybackMode.DIRECT, None)  # type: ignore[arg-type]
