"""Playback and thumbnail URL derivation.

The playback URL is never stored as independent state: it is recomputed from
the channel id and the active transcode location (if any) on every write.
"""

HLS_PATH = "hls"
THUMBNAIL_PATH = "preview"


def direct_playback_url(cdn_server: str, channel_id: str) -> str:
    return f"https://{cdn_server}/{HLS_PATH}/{channel_id}/index.m3u8"


def transcoded_playback_url(cdn_server: str, location: str, channel_id: str) -> str:
    return f"https://{cdn_server}/{location}/{channel_id}.m3u8"


def thumbnail_url(cdn_server: str, channel_id: str) -> str:
    return f"https://{cdn_server}/{THUMBNAIL_PATH}/{channel_id}.jpg"


def playback_url(cdn_server: str, channel_id: str, transcode_location: str | None = None) -> str:
    """Direct playback URL, or the transcoded one when a location is given."""
    if transcode_location is None:
        return direct_playback_url(cdn_server, channel_id)
    return transcoded_playback_url(cdn_server, transcode_location, channel_id)


def transcode_location_from_url(cdn_server: str, channel_id: str, url: str) -> str | None:
    """Recover the transcode location from a stored playback URL.

    Returns None for the direct form and for URLs not built for this channel.
    The channel id is matched case-insensitively: each webhook builds the URL
    from the casing it received.
    """
    if url.lower() == direct_playback_url(cdn_server, channel_id).lower():
        return None

    prefix = f"https://{cdn_server}/"
    suffix = f"/{channel_id}.m3u8"
    if not url.startswith(prefix) or not url.lower().endswith(suffix.lower()):
        return None

    location = url[len(prefix) : -len(suffix)]
    return location or None
