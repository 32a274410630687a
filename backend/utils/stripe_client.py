# backend/utils/stripe_client.py
import httpx
import logging
from urllib.parse import urljoin

from config import Settings
from utils.errors import PaymentProcessorError

logger = logging.getLogger(__name__)

class StripeClient:
    def __init__(self, secret_key: str, api_url: str = "https://api.stripe.com",
                 timeout: float = 10.0, transport: httpx.AsyncBaseTransport = None):
        self.secret_key = secret_key
        self.api_url = api_url
        self.timeout = timeout
        # Swappable for tests (httpx.MockTransport)
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def create_payment_intent(self, amount: int, currency: str = "usd") -> str:
        """Create a card-only PaymentIntent and return its client secret.

        The card itself is charged out-of-band by the client using the
        returned secret; this backend never sees card data.
        """
        url = urljoin(self.api_url, "/v1/payment_intents")
        payload = {
            "amount": str(amount),
            "currency": currency,
            "payment_method_types[]": "card",
        }
        headers = {"Authorization": f"Bearer {self.secret_key}"}
        async with self._client() as client:
            try:
                response = await client.post(url, data=payload, headers=headers)
            except httpx.RequestError as e:
                logger.error(f"Stripe request error: {e}")
                raise PaymentProcessorError(f"Payment processor unreachable: {e}")

        if response.status_code >= 400:
            message = _error_message(response)
            logger.error(f"Stripe create payment intent error ({response.status_code}): {message}")
            raise PaymentProcessorError(message)

        try:
            body = response.json()
        except ValueError:
            logger.error(f"Stripe returned a non-JSON body ({response.status_code})")
            raise PaymentProcessorError("Payment processor returned an unreadable response")

        secret = body.get("client_secret") if isinstance(body, dict) else None
        if not secret:
            raise PaymentProcessorError("Payment processor returned no client secret")
        return secret


def _error_message(response: httpx.Response) -> str:
    # Stripe errors look like {"error": {"message": "...", "type": "..."}}
    fallback = response.text or f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return error.get("message") or fallback
    if isinstance(error, str) and error:
        return error
    return fallback


def build_payment_processor(settings: Settings) -> StripeClient:
    return StripeClient(
        secret_key=settings.STRIPE_SECRET_KEY,
        api_url=settings.STRIPE_API_URL,
        timeout=settings.STRIPE_TIMEOUT,
    )
