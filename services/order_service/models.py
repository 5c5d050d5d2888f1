from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, func
from shared.config.database import Base

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String, nullable=False)
    phone = Column(String, nullable=False)  # digits only
    location = Column(String, nullable=True)
    delivery_option = Column(String, nullable=False, default="pickup")  # pickup, delivery
    total_amount = Column(Numeric(12, 2), nullable=False)  # subtotal + delivery fee
    status = Column(String, nullable=False, default="pending")  # pending, failed
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # unit price when ordered

