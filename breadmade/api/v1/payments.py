"""Payment API endpoints"""
from fastapi import APIRouter, Depends

from breadmade.api.deps import get_current_user, get_payment_service
from breadmade.schemas.payment import (
    PaymentIntentRequest,
    PaymentResponse,
    SavePaymentMethodRequest,
    SetupIntentRequest,
)
from breadmade.services.payment_service import PaymentService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("/payments/setup-intent", response_model=PaymentResponse, response_model_by_alias=True)
async def create_setup_intent(
    request: SetupIntentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """Prepare card storage for a bid"""
    return await service.create_setup_intent(request.auction_id, request.buyer_id)


@router.post("/payments/payment-method", response_model=PaymentResponse, response_model_by_alias=True)
async def save_payment_method(
    request: SavePaymentMethodRequest,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.save_payment_method(request)


@router.post("/payments/payment-intent", response_model=PaymentResponse, response_model_by_alias=True)
async def create_payment_intent(
    request: PaymentIntentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Charge a stored card

    - **amount** / **currency**: Charge amount
    - **auctionId** / **buyerId**: What is paid for and by whom
    - **paymentMethodId**: Stored card to charge
    """
    return await service.create_payment_intent(
        request.amount,
        request.currency,
        request.auction_id,
        request.buyer_id,
        request.payment_method_id,
    )
