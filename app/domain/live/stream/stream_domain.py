"""Stream lifecycle service.

Receives lifecycle webhooks and identity proofs for channels and keeps one
status record per channel consistent with them:

- set_live_status: the only LIVE/OFFLINE transition; always resets playback to
  the direct form. The store write happens before the registry is notified, and
  a failed write leaves the registry untouched.
- set_transcode_status: switches playback between direct and transcoded URLs for
  a known channel; unknown channels are a logged no-op.
- check_archive / save_archive: read the operator's archive flag and forward
  archive metadata (best-effort).
- verify_signature: checks a claimed channel identity before a caller honors a
  transcode location change.

Writes are last-writer-wins per channel; nothing here serializes calls.
"""

from loguru import logger

from app.app_config import get_app_environ_config
from app.schemas import HLS_CONTENT_TYPE, StreamStatus
from app.services.archive.archive_client import ArchiveClient
from app.services.signature.signature_client import SignatureClient
from app.services.stream_store import StreamStatusStore
from app.services.streamer_registry import StreamerRegistry, get_streamer_registry

from .stream_models import (
    ArchiveReportResult,
    StreamStatusResponse,
    StreamStatusUpdate,
    VerificationOutcome,
)
from .stream_state_machine import StreamStateMachine
from .stream_urls import direct_playback_url, playback_url, thumbnail_url


class StreamService:
    """Coordinates the status store, streamer registry, signature and archive APIs."""

    def __init__(
        self,
        store: StreamStatusStore | None = None,
        registry: StreamerRegistry | None = None,
        signature_client: SignatureClient | None = None,
        archive_client: ArchiveClient | None = None,
        cdn_server: str | None = None,
    ):
        config = get_app_environ_config()
        self._store = store or StreamStatusStore()
        self._registry = registry or get_streamer_registry()
        self._signature_client = signature_client or SignatureClient(
            url=config.SIGNATURE_RPC_URL,
            timeout=config.SIGNATURE_RPC_TIMEOUT_SECONDS,
        )
        self._archive_client = archive_client or ArchiveClient(
            url=config.ARCHIVE_API_URL,
            host_server=config.HOST_SERVER,
            timeout=config.ARCHIVE_API_TIMEOUT_SECONDS,
        )
        self.cdn_server = cdn_server or config.CDN_SERVER

    # ==================== LIVE STATUS ====================

    async def set_live_status(self, channel_id: str, is_live: bool) -> StreamStatusUpdate:
        """Mark a channel LIVE or OFFLINE, creating its record on first use.

        Raises whatever the store raises; the registry is only notified after
        the write succeeded.
        """
        url = direct_playback_url(self.cdn_server, channel_id)
        thumb = thumbnail_url(self.cdn_server, channel_id)

        await self._store.upsert(
            channel_id,
            {
                "claim_id": channel_id,
                "live": is_live,
                "url": url,
                "type": HLS_CONTENT_TYPE,
                "thumbnail": thumb,
            },
        )

        await self._notify_registry(channel_id, is_live)

        logger.info(f"{channel_id} is now {'🔴 LIVE' if is_live else 'OFFLINE'}")
        return StreamStatusUpdate(channel_id=channel_id, live=is_live, url=url, thumbnail=thumb)

    async def _notify_registry(self, channel_id: str, is_live: bool) -> None:
        try:
            if is_live:
                await self._registry.add_streamer(channel_id)
            else:
                await self._registry.remove_streamer(channel_id)
        except Exception as e:
            logger.exception(f"Failed to update streamer registry for {channel_id} (live={is_live}): {e}")

    # ==================== TRANSCODE STATUS ====================

    async def set_transcode_status(
        self,
        channel_id: str,
        transcoded: bool,
        location: str | None = None,
    ) -> StreamStatusUpdate | None:
        """Point playback at a transcoded location, or back at direct playback.

        Returns None without writing anything when the channel has no record;
        transcode webhooks may race an offline transition.
        """
        record = await self._store.get(channel_id)
        if record is None:
            logger.warning(f"ERROR: {channel_id} is not a valid streamer (transcode status ignored)")
            return None

        transcode_location = location if transcoded and location else None
        if transcoded and transcode_location is None:
            logger.warning(f"{channel_id} transcode started without a location, keeping direct playback")

        url = playback_url(self.cdn_server, channel_id, transcode_location)
        if not await self._store.update(channel_id, {"url": url}):
            logger.warning(f"ERROR: {channel_id} record disappeared before the transcode update (ignored)")
            return None

        logger.info(f"{channel_id}'s transcoder has {'started' if transcoded else 'stopped'}. url={url}")
        return StreamStatusUpdate(channel_id=channel_id, live=record.live, url=url)

    # ==================== ARCHIVE ====================

    async def check_archive(self, channel_id: str) -> bool:
        """Whether the operator enabled archiving for this channel."""
        record = await self._store.get(channel_id)
        if record is None:
            logger.warning(f"ERROR: {channel_id} is not a valid streamer (archive check)")
            return False

        return bool(record.archive)

    async def save_archive(
        self,
        channel_id: str,
        location: str,
        duration: float,
        thumbnails: list[str],
    ) -> ArchiveReportResult:
        """Forward archive metadata; failures are logged by the client, never raised."""
        logger.info(f"Saving archive for {channel_id}: location={location} duration={duration}")
        return await self._archive_client.report(channel_id, location, duration, thumbnails)

    # ==================== IDENTITY ====================

    async def verify_signature(
        self,
        channel_id: str,
        data_hex: str,
        signature: str,
        signature_ts: str,
    ) -> bool:
        outcome = await self.check_signature(channel_id, data_hex, signature, signature_ts)
        return outcome.is_valid

    async def check_signature(
        self,
        channel_id: str,
        data_hex: str,
        signature: str,
        signature_ts: str,
    ) -> VerificationOutcome:
        """Same as verify_signature but reports why a signature was not accepted."""
        logger.info(
            f"Verifying signature for {channel_id}: signing_ts={signature_ts} signature={signature}"
        )
        outcome = await self._signature_client.check(channel_id, data_hex, signature, signature_ts)
        logger.info(f"Signature verification for {channel_id}: {outcome.value}")
        return outcome

    # ==================== STATUS ====================

    async def get_status(self, channel_id: str) -> StreamStatusResponse | None:
        """Stored status with derived state, or None for an unknown channel."""
        record = await self._store.get(channel_id)
        if record is None:
            return None
        return self._to_response(record)

    def _to_response(self, record: StreamStatus) -> StreamStatusResponse:
        playback_mode, location = StreamStateMachine.playback_of(record, self.cdn_server)
        return StreamStatusResponse(
            channel_id=record.channel_id,
            claim_id=record.claim_id,
            live=record.live,
            url=record.url,
            type=record.type,
            thumbnail=record.thumbnail,
            archive=record.archive,
            updated_at=record.updated_at,
            state=StreamStateMachine.state_of(record),
            playback_mode=playback_mode,
            transcode_location=location,
        )


_stream_service: StreamService | None = None


def get_stream_service() -> StreamService:
    """Get the process-wide StreamService instance."""
    global _stream_service
    if _stream_service is None:
        _stream_service = StreamService()
    return _stream_service
