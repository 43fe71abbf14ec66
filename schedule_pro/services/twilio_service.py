"""
Twilio Verify Service
Sends and checks SMS one-time codes through the Twilio Verify v2 REST API
"""

import logging
from typing import Optional

import httpx
from fastapi import HTTPException

from ..config import TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_VERIFY_SERVICE_SID

logger = logging.getLogger(__name__)

TWILIO_VERIFY_BASE_URL = "https://verify.twilio.com/v2"


class TwilioVerifyService:
    """Thin async client for the Verifications and VerificationCheck endpoints"""

    def __init__(
        self,
        account_sid: Optional[str],
        auth_token: Optional[str],
        service_sid: Optional[str],
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.service_sid = service_sid
        self.transport = transport
        self.timeout = timeout

    def _ensure_configured(self) -> None:
        if not (self.account_sid and self.auth_token and self.service_sid):
            logger.error("❌ Twilio Verify credentials missing")
            raise HTTPException(status_code=400, detail="Twilio Verify is not configured")

    async def _post(self, path: str, data: dict) -> httpx.Response:
        self._ensure_configured()
        url = f"{TWILIO_VERIFY_BASE_URL}/Services/{self.service_sid}/{path}"
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.post(url, auth=(self.account_sid, self.auth_token), data=data)
        except httpx.HTTPError as e:
            logger.error(f"❌ Twilio Verify request failed: {str(e)}")
            raise HTTPException(status_code=502, detail="SMS verification provider unavailable") from e

        logger.info(f"📡 Twilio Verify {path} response status: {response.status_code}")
        return response

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        try:
            error_data = response.json()
        except ValueError:
            error_data = {}
        error_message = error_data.get("message", "Unknown error")
        error_code = error_data.get("code")
        logger.error(f"❌ Twilio API error [{error_code}]: {error_message}")
        raise HTTPException(status_code=502, detail=f"SMS verification provider error: {error_message}")

    async def create_verification(self, to: str, channel: str = "sms") -> dict:
        """Ask Twilio to send a one-time code to `to`"""
        logger.info(f"📱 Requesting {channel} verification for {to}")
        response = await self._post("Verifications", {"To": to, "Channel": channel})
        if response.status_code not in [200, 201]:
            self._raise_for_error(response)
        return response.json()

    async def check_verification(self, to: str, code: str) -> dict:
        """Check a code; Twilio answers 404 once a verification has expired or been used"""
        response = await self._post("VerificationCheck", {"To": to, "Code": code})
        if response.status_code == 404:
            logger.info(f"ℹ️ No pending verification for {to}")
            return {"status": "not_found", "valid": False}
        if response.status_code not in [200, 201]:
            self._raise_for_error(response)
        return response.json()


def get_twilio_verify_service() -> TwilioVerifyService:
    """Dependency injection for TwilioVerifyService"""
    return TwilioVerifyService(TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_VERIFY_SERVICE_SID)
