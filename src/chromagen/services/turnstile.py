"""Cloudflare Turnstile server-side verification.

https://developers.cloudflare.com/turnstile/get-started/server-side-validation/
"""

from __future__ import annotations

from typing import Any

import httpx

from chromagen.exceptions import CaptchaRequiredError, CaptchaVerificationError
from chromagen.logging_config import get_logger
from chromagen.services.interfaces import CaptchaVerifier, TurnstileResult

logger = get_logger(__name__)

DEFAULT_VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


class TurnstileVerifier(CaptchaVerifier):
    def __init__(
        self,
        secret_key: str | None,
        verify_url: str = DEFAULT_VERIFY_URL,
        skip_when_unconfigured: bool = False,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._verify_url = verify_url
        self._skip_when_unconfigured = skip_when_unconfigured
        self._timeout = timeout
        self._client = client

    def _post(self, data: dict[str, str]) -> dict[str, Any]:
        if self._client is not None:
            response = self._client.post(self._verify_url, data=data)
        else:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(self._verify_url, data=data)
        response.raise_for_status()
        return response.json()

    def verify(self, token: str, remote_ip: str | None = None) -> TurnstileResult:
        if not self._secret_key:
            if self._skip_when_unconfigured:
                logger.warning("turnstile_skipped", reason="no secret key configured")
                return TurnstileResult(success=True)
            logger.error("turnstile_not_configured")
            return TurnstileResult(success=False, error_codes=["missing-secret-key"])

        data = {"secret": self._secret_key, "response": token}
        if remote_ip:
            data["remoteip"] = remote_ip

        try:
            payload = self._post(data)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("turnstile_verification_failed", error=str(e))
            return TurnstileResult(success=False, error_codes=["verification-failed"])

        return TurnstileResult(
            success=bool(payload.get("success", False)),
            error_codes=list(payload.get("error-codes") or []),
            hostname=payload.get("hostname"),
            challenge_ts=payload.get("challenge_ts"),
            action=payload.get("action"),
        )

    def require_valid(self, token: str | None, remote_ip: str | None = None) -> None:
        """Raise unless token is present and accepted by Turnstile."""
        if not token:
            raise CaptchaRequiredError()

        result = self.verify(token, remote_ip)
        if not result.success:
            logger.warning("turnstile_rejected", error_codes=result.error_codes)
            raise CaptchaVerificationError(result.error_codes)
