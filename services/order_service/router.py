from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.settings import Settings, get_settings
from shared.security import checkout_rate_limit, limiter, require_admin

from .schemas import CheckoutRequest, CheckoutResponse, OrderResponse
from .service import OrderService

router = APIRouter(tags=["Orders"])


@router.post("/checkout", response_model=CheckoutResponse)
@limiter.limit(checkout_rate_limit)
async def checkout(
    request: Request,  # REQUIRED: slowapi needs this to key the limit
    payload: CheckoutRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await OrderService.checkout(db, payload, settings.delivery_fee)


@router.get("/orders", response_model=list[OrderResponse], dependencies=[Depends(require_admin)])
async def list_orders(db: AsyncSession = Depends(get_db)):
    return await OrderService.list_orders(db)
