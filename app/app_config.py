from pydantic import BaseModel

from app.shared.config import config


class AppEnvironConfig(BaseModel):
    # Hosts used when building playback, thumbnail and archive payloads
    CDN_SERVER: str = config.get("CDN_SERVER", "cdn.example.com").strip()  # type: ignore
    HOST_SERVER: str = config.get("HOST_SERVER", "ingest.example.com").strip()  # type: ignore

    # Signature verification JSON-RPC
    SIGNATURE_RPC_URL: str = config.get(
        "SIGNATURE_RPC_URL", "https://comments.odysee.tv/api/v2?m=verify.Signature"
    ).strip()  # type: ignore
    SIGNATURE_RPC_TIMEOUT_SECONDS: float = float(
        (config.get("SIGNATURE_RPC_TIMEOUT_SECONDS") or "").strip() or 10
    )

    # Archive ingestion API
    ARCHIVE_API_URL: str = config.get("ARCHIVE_API_URL", "https://api.bitwave.tv/v1/archives").strip()  # type: ignore
    ARCHIVE_API_TIMEOUT_SECONDS: float = float(
        (config.get("ARCHIVE_API_TIMEOUT_SECONDS") or "").strip() or 30
    )

    # Status store
    STREAM_STORE_TIMEOUT_SECONDS: float = float(
        (config.get("STREAM_STORE_TIMEOUT_SECONDS") or "").strip() or 10
    )

    # Active streamer registry: "memory" (process-local) or "redis" (shared set)
    STREAMER_REGISTRY_BACKEND: str = config.get("STREAMER_REGISTRY_BACKEND", "memory").strip().lower()  # type: ignore
    STREAMER_REGISTRY_KEY: str = config.get(
        "STREAMER_REGISTRY_KEY", "stream-lifecycle:active_streamers"
    ).strip()  # type: ignore
    STREAMER_REGISTRY_REDIS_LABEL: str = config.get("STREAMER_REGISTRY_REDIS_LABEL", "default").strip()  # type: ignore


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
