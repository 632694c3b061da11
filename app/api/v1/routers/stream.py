from fastapi import APIRouter, Depends, Path

from app.api.v1.schemas.stream import StreamStatusOut
from app.domain.live.stream.stream_domain import StreamService, get_stream_service
from app.shared.api.utils import ApiOut
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

router = APIRouter(prefix="/stream", tags=["Stream"])


@router.get("/status/{channel_id}")
async def get_stream_status(
    channel_id: str = Path(..., min_length=1, description="Channel id, case-insensitive"),
    service: StreamService = Depends(get_stream_service),
) -> ApiOut[StreamStatusOut]:
    """Current live status, playback URL and archive flag of a channel."""
    status = await service.get_status(channel_id)
    if status is None:
        raise AppError(
            errcode=AppErrorCode.E_STREAMER_NOT_FOUND,
            errmesg=f"Streamer not found: {channel_id}",
            status_code=HttpStatusCode.NOT_FOUND,
        )

    return ApiOut[StreamStatusOut](
        results=StreamStatusOut(
            channel_id=status.claim_id,
            live=status.live,
            url=status.url,
            type=status.type,
            thumbnail=status.thumbnail,
            archive=status.archive,
            state=status.state,
            playback_mode=status.playback_mode,
            transcode_location=status.transcode_location,
            updated_at=status.updated_at,
        )
    )
