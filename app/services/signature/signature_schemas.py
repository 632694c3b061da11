from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool

VERIFY_SIGNATURE_METHOD = "verify.Signature"


class VerificationOutcome(str, Enum):
    """Result of a signature check.

    Only VALID grants the claimed identity. INVALID means the verification
    service rejected the signature, UNAVAILABLE means no usable answer was
    obtained (transport error, timeout, empty or malformed response).
    """

    VALID = "valid"
    INVALID = "invalid"
    UNAVAILABLE = "unavailable"

    @property
    def is_valid(self) -> bool:
        return self is VerificationOutcome.VALID


class SignatureRpcParams(BaseModel):
    channel_id: str = Field(..., description="Claimed channel id")
    signature: str = Field(..., description="Hex signature")
    signing_ts: str = Field(..., description="Timestamp that was signed with the data")
    data_hex: str = Field(..., description="Signed payload, hex encoded")


class SignatureRpcRequest(BaseModel):
    """JSON-RPC 2.0 request body for verify.Signature."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int = 0
    method: Literal["verify.Signature"] = VERIFY_SIGNATURE_METHOD
    params: SignatureRpcParams


class SignatureRpcResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    is_valid: StrictBool | None = None


class SignatureRpcResponse(BaseModel):
    """JSON-RPC response: carries either `result` or `error`."""

    model_config = ConfigDict(extra="allow")

    result: SignatureRpcResult | None = None
    # Usually `{code, message}`, but any non-empty value is a rejection
    error: Any = None

    @property
    def has_error(self) -> bool:
        if isinstance(self.error, (dict, list)):
            return True
        return bool(self.error)

    @property
    def error_message(self) -> str:
        if isinstance(self.error, dict):
            return str(self.error.get("message"))
        return str(self.error)
