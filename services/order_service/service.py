from collections import defaultdict
from decimal import Decimal

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.payment_service.service import PaymentError, PaymentService
from shared.errors import PartialOrderFailure, PaymentFailure, QueryFailure, ValidationError
from shared.observability.metrics import (
    bookstore_checkout_duration_seconds,
    bookstore_checkout_total,
    bookstore_order_rollback_total,
)
from shared.phone import normalize_phone

from .models import Order
from .repository import OrderRepository
from .schemas import CheckoutItem, CheckoutRequest, CheckoutResponse, OrderItemResponse, OrderResponse

logger = structlog.get_logger(__name__)


def merge_lines(items: list[CheckoutItem]) -> list[CheckoutItem]:
    """Collapse repeated product ids into one line each, keeping first-seen order."""
    merged: dict[int, CheckoutItem] = {}
    for item in items:
        existing = merged.get(item.product_id)
        if existing is None:
            merged[item.product_id] = item.model_copy()
        elif existing.price != item.price:
            raise ValidationError(f"Conflicting prices for product {item.product_id}")
        else:
            existing.quantity += item.quantity
    return list(merged.values())


def order_total(lines: list[CheckoutItem], delivery_option: str, delivery_fee: Decimal) -> Decimal:
    subtotal = sum((line.price * line.quantity for line in lines), Decimal("0"))
    if delivery_option == "delivery":
        return subtotal + delivery_fee
    return subtotal


class OrderService:

    @staticmethod
    def prepare_order(data: CheckoutRequest, delivery_fee: Decimal) -> tuple[Order, list[CheckoutItem]]:
        """Validate a checkout request and build the unsaved order header and its lines."""
        customer_name = data.customer_name.strip()
        phone = normalize_phone(data.phone)
        location = (data.location or "").strip() or None

        if not customer_name:
            raise ValidationError("Customer name is required")
        if not phone:
            raise ValidationError("Phone number is required")
        if data.delivery_option == "delivery" and not location:
            raise ValidationError("Delivery location is required for delivery orders")
        if not data.items:
            raise ValidationError("Cart is empty")

        lines = merge_lines(data.items)
        total = order_total(lines, data.delivery_option, delivery_fee)
        if data.amount is not None and data.amount != total:
            raise ValidationError(f"Amount {data.amount} does not match order total {total}")

        order = Order(
            customer_name=customer_name,
            phone=phone,
            location=location,
            delivery_option=data.delivery_option,
            total_amount=total,
            status="pending",
        )
        return order, lines

    @staticmethod
    async def save_order(db: AsyncSession, order: Order, lines: list[CheckoutItem]) -> Order:
        """Write the header and every line in one transaction; any failure leaves nothing behind."""
        stage = "header"
        try:
            async with db.begin():
                await OrderRepository.add_order(db, order)
                stage = "items"
                for line in lines:
                    await OrderRepository.add_item(db, order.id, line.product_id, line.quantity, line.price)
        except (SQLAlchemyError, OSError) as e:
            bookstore_order_rollback_total.labels(stage=stage).inc()
            logger.error("order_rolled_back", stage=stage, error=str(e))
            if stage == "items":
                raise PartialOrderFailure(f"Could not save order items, order rolled back: {e}") from e
            raise QueryFailure(str(e)) from e
        return order

    @staticmethod
    async def checkout(db: AsyncSession, data: CheckoutRequest, delivery_fee: Decimal) -> CheckoutResponse:
        with bookstore_checkout_duration_seconds.time():
            try:
                order, lines = OrderService.prepare_order(data, delivery_fee)
            except ValidationError as e:
                bookstore_checkout_total.labels(status="rejected").inc()
                logger.info("checkout_rejected", reason=e.message)
                raise

            try:
                await OrderService.save_order(db, order, lines)
            except (QueryFailure, PartialOrderFailure):
                bookstore_checkout_total.labels(status="failed").inc()
                raise

            try:
                ack = await PaymentService.request_payment(order.id, order.phone, order.total_amount)
            except PaymentError as e:
                await OrderService.mark_failed(db, order.id)
                bookstore_checkout_total.labels(status="payment_failed").inc()
                logger.error("payment_failed", order_id=order.id, error=str(e))
                raise PaymentFailure(f"Payment request failed: {e}", order_id=order.id) from e

        bookstore_checkout_total.labels(status="success").inc()
        logger.info(
            "checkout_completed",
            order_id=order.id,
            total=str(order.total_amount),
            lines=len(lines),
            delivery_option=order.delivery_option,
        )
        return CheckoutResponse(order_id=order.id, payment_acknowledgement=ack)

    @staticmethod
    async def mark_failed(db: AsyncSession, order_id: int):
        try:
            async with db.begin():
                await OrderRepository.set_status(db, order_id, "failed")
        except (SQLAlchemyError, OSError) as e:
            raise QueryFailure(str(e)) from e

    @staticmethod
    async def list_orders(db: AsyncSession) -> list[OrderResponse]:
        """Newest orders first, each with its line items and product titles."""
        try:
            orders = await OrderRepository.list_orders(db)
            rows = await OrderRepository.list_items(db, [order.id for order in orders])
        except (SQLAlchemyError, OSError) as e:
            logger.error("order_list_failed", error=str(e))
            raise QueryFailure(str(e)) from e

        items_by_order = defaultdict(list)
        for row in rows:
            items_by_order[row["order_id"]].append(
                OrderItemResponse(
                    product_id=row["product_id"],
                    title=row["title"],
                    quantity=row["quantity"],
                    price=row["price"],
                )
            )

        return [
            OrderResponse(
                id=order.id,
                customer_name=order.customer_name,
                phone=order.phone,
                location=order.location,
                delivery_option=order.delivery_option,
                total_amount=order.total_amount,
                status=order.status,
                created_at=order.created_at,
                items=items_by_order[order.id],
            )
            for order in orders
        ]
