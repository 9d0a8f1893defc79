"""Client for the hosted payment functions"""
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from breadmade.core.config import Settings
from breadmade.schemas.payment import (
    PaymentIntentRequest,
    PaymentResponse,
    SavePaymentMethodRequest,
    SetupIntentRequest,
)
from breadmade.utils.logger import logger


class PaymentService:
    """Calls the card-processing functions deployed next to the backend.

    Every call answers with a :class:`PaymentResponse`; transport or decoding
    problems are reported as ``success=False`` with a fixed message instead of
    being raised.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.functions_url = settings.functions_url
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.SUPABASE_ANON_KEY}",
        }

    async def _invoke(self, function: str, payload: BaseModel, failure_message: str) -> PaymentResponse:
        try:
            response = await self.client.post(
                f"{self.functions_url}/{function}",
                json=payload.model_dump(by_alias=True),
                headers=self._headers(),
            )
            return PaymentResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error(f"Error calling payment function {function}: {e}")
            return PaymentResponse(success=False, error=failure_message)

    async def create_setup_intent(self, auction_id: str, buyer_id: str) -> PaymentResponse:
        """
        Prepare card storage for a bid that is charged later

        Args:
            auction_id: Auction the card is saved for
            buyer_id: Bidder's user id

        Returns:
            PaymentResponse carrying ``setup_intent`` on success
        """
        return await self._invoke(
            "create-setup-intent",
            SetupIntentRequest(auction_id=auction_id, buyer_id=buyer_id),
            "Failed to create setup intent",
        )

    async def save_payment_method(self, request: SavePaymentMethodRequest) -> PaymentResponse:
        """Persist a confirmed card; the response carries ``payment_method``"""
        return await self._invoke("save-payment-method", request, "Failed to save payment method")

    async def create_payment_intent(
        self,
        amount: float,
        currency: str,
        auction_id: str,
        buyer_id: str,
        payment_method_id: str,
    ) -> PaymentResponse:
        """
        Charge a stored card, e.g. when an auction winner is settled

        Returns:
            PaymentResponse carrying ``payment_intent`` on success
        """
        return await self._invoke(
            "create-payment-intent",
            PaymentIntentRequest(
                amount=amount,
                currency=currency or self.settings.DEFAULT_CURRENCY,
                auction_id=auction_id,
                buyer_id=buyer_id,
                payment_method_id=payment_method_id,
            ),
            "Failed to create payment intent",
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
