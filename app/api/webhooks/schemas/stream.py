"""Request and response bodies for the stream lifecycle webhooks."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.services.signature.signature_schemas import VerificationOutcome

_CHANNEL_ID_ALIASES = AliasChoices("channel_id", "channelId", "claim_id", "claimId")


class _ChannelIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    channel_id: str = Field(
        ...,
        min_length=1,
        validation_alias=_CHANNEL_ID_ALIASES,
        description="Channel id (claim id) as sent by the edge server",
    )


class LiveStatusIn(_ChannelIn):
    is_live: bool = Field(
        ...,
        validation_alias=AliasChoices("is_live", "isLive", "live"),
        description="True on publish, False on unpublish",
    )


class TranscodeStatusIn(_ChannelIn):
    transcoded: bool = Field(..., description="Whether a transcoder is serving the channel")
    location: str | None = Field(
        default=None,
        description="Transcode location path, used verbatim in the playback URL",
    )


class ArchiveCheckIn(_ChannelIn):
    pass


class ArchiveSaveIn(_ChannelIn):
    location: str = Field(..., description="Archive storage location")
    duration: float = Field(..., ge=0, description="Archive duration in seconds")
    thumbnails: list[str] = Field(default_factory=list, description="Ordered thumbnail references")


class SignatureVerifyIn(_ChannelIn):
    data_hex: str = Field(
        ...,
        validation_alias=AliasChoices("data_hex", "dataHex", "hexData"),
        description="Signed payload, hex encoded",
    )
    signature: str = Field(..., description="Signature over the payload")
    signature_ts: str = Field(
        ...,
        validation_alias=AliasChoices("signature_ts", "signatureTs", "signing_ts"),
        description="Signing timestamp",
    )


class LiveStatusOut(BaseModel):
    channel_id: str
    live: bool
    url: str
    thumbnail: str | None = None


class TranscodeStatusOut(BaseModel):
    updated: bool = Field(description="False when the channel is unknown and nothing was written")
    channel_id: str
    url: str | None = None


class ArchiveCheckOut(BaseModel):
    archive: bool


class ArchiveSaveOut(BaseModel):
    reported: bool = Field(description="Whether the archive API acknowledged the report")


class SignatureVerifyOut(BaseModel):
    valid: bool
    outcome: VerificationOutcome
