from fastapi import APIRouter, status
from core.policy import scope_to_caller
from schemas.payment_schemas import CheckoutSessionRequest, CheckoutSessionResponse
from services.order_service import OrderService
from services.payment_service import PaymentService
from utils.deps import db_dependency, user_dependency, gateway_dependency


router = APIRouter(tags=["payments"])


@router.post("/payment-checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(body: CheckoutSessionRequest, user: user_dependency,
    db: db_dependency, gateway: gateway_dependency):
    """
    Open a checkout session for a pending order and return the redirect URL.
    """
    return PaymentService.create_checkout_session(body, user, db, gateway)


@router.patch("/payment-success", status_code=status.HTTP_200_OK)
async def payment_success(session_id: str, user: user_dependency,
    db: db_dependency, gateway: gateway_dependency):
    return PaymentService.reconcile(session_id, user, db, gateway)


@router.get("/payments", status_code=status.HTTP_200_OK)
async def list_payments(user: user_dependency, db: db_dependency, email: str | None = None):
    return OrderService.list_payments(db, scope_to_caller(user, email))
