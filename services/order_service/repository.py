from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from services.catalog_service.models import Product

from .models import Order, OrderItem


class OrderRepository:
    """Order persistence. Writes only flush; callers own the transaction."""

    @staticmethod
    async def add_order(db: AsyncSession, order: Order):
        db.add(order)
        await db.flush()
        return order

    @staticmethod
    async def add_item(db: AsyncSession, order_id: int, product_id: int, quantity: int, price):
        item = OrderItem(order_id=order_id, product_id=product_id, quantity=quantity, price=price)
        db.add(item)
        await db.flush()
        return item

    @staticmethod
    async def set_status(db: AsyncSession, order_id: int, status: str):
        await db.execute(update(Order).where(Order.id == order_id).values(status=status))

    @staticmethod
    async def list_orders(db: AsyncSession):
        result = await db.execute(select(Order).order_by(Order.created_at.desc(), Order.id.desc()))
        return result.scalars().all()

    @staticmethod
    async def list_items(db: AsyncSession, order_ids: list[int]):
        if not order_ids:
            return []
        result = await db.execute(
            select(
                OrderItem.order_id,
                OrderItem.product_id,
                Product.title,
                OrderItem.quantity,
                OrderItem.price,
            )
            .outerjoin(Product, OrderItem.product_id == Product.id)
            .where(OrderItem.order_id.in_(order_ids))
            .order_by(OrderItem.id)
        )
        return result.mappings().all()
