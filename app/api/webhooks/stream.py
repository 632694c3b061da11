"""Stream lifecycle webhook endpoints.

Called by the ingest edge server (publish, unpublish, transcoder and recording
callbacks) and by the admin tools that gate transcode location changes.

Endpoints:
- POST /webhooks/stream/live: channel published or unpublished
- POST /webhooks/stream/transcode: transcoder started or stopped for a channel
- POST /webhooks/stream/archive/check: should this channel's recording be archived
- POST /webhooks/stream/archive/save: recording finished, forward it to the archive API
- POST /webhooks/stream/signature/verify: check a signed channel identity claim

Status store failures on live/transcode are not caught here: they surface as a
500 so the edge server redelivers the callback.
"""

from fastapi import APIRouter, Depends
from loguru import logger

from app.api.webhooks.schemas.stream import (
    ArchiveCheckIn,
    ArchiveCheckOut,
    ArchiveSaveIn,
    ArchiveSaveOut,
    LiveStatusIn,
    LiveStatusOut,
    SignatureVerifyIn,
    SignatureVerifyOut,
    TranscodeStatusIn,
    TranscodeStatusOut,
)
from app.domain.live.stream.stream_domain import StreamService, get_stream_service
from app.shared.api.utils import ApiOut

router = APIRouter(prefix="/webhooks/stream", tags=["Webhooks"])


@router.post("/live")
async def live_status_webhook(
    body: LiveStatusIn,
    service: StreamService = Depends(get_stream_service),
) -> ApiOut[LiveStatusOut]:
    """Record a publish (is_live=true) or unpublish (is_live=false) event."""
    logger.info(f"📥 Live status webhook: channel_id={body.channel_id} is_live={body.is_live}")

    result = await service.set_live_status(body.channel_id, body.is_live)

    return ApiOut[LiveStatusOut](
        results=LiveStatusOut(
            channel_id=result.channel_id,
            live=bool(result.live),
            url=result.url,
            thumbnail=result.thumbnail,
        )
    )


@router.post("/transcode")
async def transcode_status_webhook(
    body: TranscodeStatusIn,
    service: StreamService = Depends(get_stream_service),
) -> ApiOut[TranscodeStatusOut]:
    """Switch a channel's playback URL to or from a transcode location."""
    logger.info(
        f"📥 Transcode webhook: channel_id={body.channel_id} "
        f"transcoded={body.transcoded} location={body.location}"
    )

    result = await service.set_transcode_status(body.channel_id, body.transcoded, body.location)

    return ApiOut[TranscodeStatusOut](
        results=TranscodeStatusOut(
            updated=result is not None,
            channel_id=body.channel_id,
            url=result.url if result else None,
        )
    )


@router.post("/archive/check")
async def archive_check_webhook(
    body: ArchiveCheckIn,
    service: StreamService = Depends(get_stream_service),
) -> ApiOut[ArchiveCheckOut]:
    archive = await service.check_archive(body.channel_id)
    return ApiOut[ArchiveCheckOut](results=ArchiveCheckOut(archive=archive))


@router.post("/archive/save")
async def archive_save_webhook(
    body: ArchiveSaveIn,
    service: StreamService = Depends(get_stream_service),
) -> ApiOut[ArchiveSaveOut]:
    """Forward a finished recording to the archive API (best-effort)."""
    result = await service.save_archive(
        body.channel_id,
        body.location,
        body.duration,
        body.thumbnails,
    )
    return ApiOut[ArchiveSaveOut](results=ArchiveSaveOut(reported=result.ok))


@router.post("/signature/verify")
async def signature_verify_webhook(
    body: SignatureVerifyIn,
    service: StreamService = Depends(get_stream_service),
) -> ApiOut[SignatureVerifyOut]:
    outcome = await service.check_signature(
        body.channel_id,
        body.data_hex,
        body.signature,
        body.signature_ts,
    )
    return ApiOut[SignatureVerifyOut](
        results=SignatureVerifyOut(valid=outcome.is_valid, outcome=outcome)
    )
