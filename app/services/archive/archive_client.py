"""Client for the archive ingestion API.

Archive notification is best-effort: failures are logged and returned as a
negative result, never raised.
"""

from urllib.parse import urlencode

import httpx
from loguru import logger

from app.services.archive.archive_schemas import ArchiveReportForm, ArchiveReportResult


class ArchiveClient:
    def __init__(
        self,
        url: str,
        host_server: str,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.host_server = host_server
        self.timeout = timeout
        self._transport = transport

    async def report(
        self,
        channel_id: str,
        location: str,
        duration: float,
        thumbnails: list[str],
    ) -> ArchiveReportResult:
        """Send archive metadata for `channel_id` to the ingestion API."""
        form = ArchiveReportForm(
            server=self.host_server,
            username=channel_id,
            location=location,
            duration=duration,
            thumbnails=thumbnails,
        )
        logger.debug(f"Archive report body: {form.model_dump()}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    content=urlencode(form.to_form()),
                    headers={"content-type": "application/x-www-form-urlencoded"},
                    timeout=self.timeout,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Archive API rejected archive for {channel_id}: "
                f"status={e.response.status_code} body={e.response.text}"
            )
            return ArchiveReportResult(
                ok=False,
                status_code=e.response.status_code,
                body=e.response.text,
                error=str(e),
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to report archive for {channel_id}: {e!r}")
            return ArchiveReportResult(ok=False, error=repr(e))

        logger.info(f"📤 Archive reported for {channel_id}: {response.text}")
        return ArchiveReportResult(ok=True, status_code=response.status_code, body=response.text)
