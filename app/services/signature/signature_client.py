"""Client for the channel signature verification JSON-RPC service.

A single attempt per call: verification sits on the critical path of a
privileged action, so failures are reported, never retried. Every failure
mode resolves to a negative outcome and is logged with its own message.
"""

import httpx
import orjson
from loguru import logger
from pydantic import ValidationError

from app.services.signature.signature_schemas import (
    SignatureRpcParams,
    SignatureRpcRequest,
    SignatureRpcResponse,
    VerificationOutcome,
)


class SignatureClient:
    def __init__(
        self,
        url: str,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def verify(self, channel_id: str, data_hex: str, signature: str, signature_ts: str) -> bool:
        """Return True only when the service explicitly confirms the signature."""
        outcome = await self.check(channel_id, data_hex, signature, signature_ts)
        return outcome.is_valid

    async def check(
        self,
        channel_id: str,
        data_hex: str,
        signature: str,
        signature_ts: str,
    ) -> VerificationOutcome:
        """Verify that `channel_id` signed `data_hex` and report why when it did not."""
        body = SignatureRpcRequest(
            params=SignatureRpcParams(
                channel_id=channel_id,
                signature=signature,
                signing_ts=signature_ts,
                data_hex=data_hex,
            )
        )
        payload = body.model_dump()

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    json=payload,
                    headers={"content-type": "application/json"},
                    timeout=self.timeout,
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Signature RPC call timed out after {self.timeout}s for {channel_id}: {e!r}")
            return VerificationOutcome.UNAVAILABLE
        except httpx.HTTPError as e:
            logger.error(f"Error during signature RPC call to validate channel {channel_id}: {e!r}")
            return VerificationOutcome.UNAVAILABLE

        logger.info(f"SENT: {orjson.dumps(payload).decode()}")
        logger.info(f"RESPONSE: {response.text}")

        if not response.content.strip():
            logger.warning(f"Signature RPC response was empty for {channel_id}")
            return VerificationOutcome.UNAVAILABLE

        try:
            data = orjson.loads(response.content)
        except orjson.JSONDecodeError:
            logger.warning(f"Signature failed verification for {channel_id} (undecodable RPC response)")
            return VerificationOutcome.UNAVAILABLE

        if data is None:
            logger.warning(f"Signature RPC response was empty for {channel_id}")
            return VerificationOutcome.UNAVAILABLE

        try:
            rpc_response = SignatureRpcResponse.model_validate(data)
        except ValidationError:
            logger.warning(f"Signature failed verification for {channel_id} (malformed RPC response)")
            return VerificationOutcome.UNAVAILABLE

        if rpc_response.result is not None and rpc_response.result.is_valid is True:
            logger.info(f"✅ Signature verified for {channel_id}")
            return VerificationOutcome.VALID

        if rpc_response.has_error:
            logger.warning(f"Invalid signature for {channel_id}: {rpc_response.error_message}")
            return VerificationOutcome.INVALID

        if rpc_response.result is not None and rpc_response.result.is_valid is False:
            logger.warning(f"Signature rejected for {channel_id} (is_valid=false)")
            return VerificationOutcome.INVALID

        logger.warning(f"Signature failed verification for {channel_id} (malformed RPC response)")
        return VerificationOutcome.UNAVAILABLE
