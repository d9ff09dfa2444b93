"""
PAYSTACK PAYMENT GATEWAY
========================
Thin async client for the two Paystack calls the donation flow needs.

Flow:
1. /donations/create-payment → initialize → hosted checkout URL
2. Donor pays on Paystack, gets redirected to the callback URL
3. /donations/verify/{reference} → verify → record the Donation

Amounts go to Paystack in minor units (kobo / cents).
"""

import secrets
import time
from typing import Any, Dict, Optional

import httpx

from alumni.core.config import settings
from alumni.core.exceptions import PaymentGatewayError
from alumni.core.logging_config import logger
from alumni.core.retry import retry_with_backoff


DEFAULT_CURRENCY = "NGN"

_BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def normalize_currency(currency: Optional[str]) -> str:
    """USD (any case) stays USD, everything else is NGN"""
    if currency and currency.upper() == "USD":
        return "USD"
    return DEFAULT_CURRENCY


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def from_minor_units(amount: int) -> float:
    return amount / 100


def _base36(number: int) -> str:
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[rem])
    return "".join(reversed(digits)) or "0"


def generate_reference(prefix: Optional[str] = None) -> str:
    """Unique transaction reference: <prefix>-<epoch ms>-<random base36>"""
    prefix = prefix or settings.DONATION_REFERENCE_PREFIX
    epoch_ms = int(time.time() * 1000)
    return f"{prefix}-{epoch_ms}-{_base36(secrets.randbelow(36 ** 6))}"


class GatewayUnavailable(Exception):
    """Paystack answered with a 5xx - safe to retry idempotent calls"""


class PaystackGateway:
    """Async Paystack client (initialize + verify)"""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        verify_max_retries: Optional[int] = None,
        retry_base_delay: float = 0.5,
    ):
        self.secret_key = secret_key if secret_key is not None else settings.PAYSTACK_SECRET_KEY
        self.base_url = (base_url or settings.PAYSTACK_BASE_URL).rstrip("/")
        self.timeout = settings.PAYSTACK_TIMEOUT_SECONDS
        self._transport = transport

        # Verification is idempotent, so transport errors and 5xx are retried
        self._fetch_verification = retry_with_backoff(
            max_retries=verify_max_retries or settings.PAYSTACK_VERIFY_MAX_RETRIES,
            base_delay=retry_base_delay,
            retry_on=(httpx.TransportError, GatewayUnavailable),
            label="Paystack-Verify",
        )(self._fetch_verification_once)

    @property
    def is_configured(self) -> bool:
        return bool(self.secret_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self.secret_key}",
                "Content-Type": "application/json",
            },
        )

    @staticmethod
    def _gateway_message(response: httpx.Response) -> str:
        try:
            return response.json().get("message") or response.text
        except ValueError:
            return response.text

    async def initialize_transaction(
        self,
        amount: int,
        email: str,
        currency: str,
        reference: str,
        callback_url: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Start a hosted checkout and return its authorization URL.

        Not retried: a second initialize could open a second checkout.
        """
        payload = {
            "amount": amount,
            "email": email,
            "currency": currency,
            "reference": reference,
            "callback_url": callback_url,
            "metadata": metadata or {},
        }

        try:
            async with self._client() as client:
                response = await client.post("/transaction/initialize", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"[Paystack] Initialize transport error for {reference}: {e}")
            raise PaymentGatewayError("Payment initialization failed", gateway_message=str(e)) from e

        if response.status_code >= 400:
            message = self._gateway_message(response)
            logger.error(f"[Paystack] Initialize rejected ({response.status_code}) for {reference}: {message}")
            raise PaymentGatewayError("Payment initialization failed", gateway_message=message)

        data = response.json().get("data") or {}
        authorization_url = data.get("authorization_url")
        if not authorization_url:
            raise PaymentGatewayError("Payment initialization failed", gateway_message="No authorization_url in response")

        return authorization_url

    async def _fetch_verification_once(self, reference: str) -> httpx.Response:
        async with self._client() as client:
            response = await client.get(f"/transaction/verify/{reference}")
        if response.status_code >= 500:
            raise GatewayUnavailable(f"Paystack returned {response.status_code}")
        return response

    async def verify_transaction(self, reference: str) -> Dict[str, Any]:
        """
        Look up a transaction. Returns Paystack's `data` object
        (status, amount in minor units, currency, reference...).
        """
        try:
            response = await self._fetch_verification(reference)
        except (httpx.HTTPError, GatewayUnavailable) as e:
            raise PaymentGatewayError("Verification failed", gateway_message=str(e)) from e

        if response.status_code >= 400:
            message = self._gateway_message(response)
            logger.error(f"[Paystack] Verify rejected ({response.status_code}) for {reference}: {message}")
            raise PaymentGatewayError("Verification failed", gateway_message=message)

        return response.json().get("data") or {}


def get_payment_gateway() -> PaystackGateway:
    """FastAPI dependency"""
    return PaystackGateway()
