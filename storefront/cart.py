"""
Client-held shopping cart.

The cart maps product ids to a product snapshot and a quantity. A line
never sits at quantity 0: lowering it that far removes the line. Totals
are always recomputed from the current lines.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from shared.config.settings import DEFAULT_DELIVERY_FEE


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass
class CartLine:
    product: Mapping[str, Any]
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product["id"]

    @property
    def title(self) -> str:
        return self.product.get("title", "")

    @property
    def price(self) -> Decimal:
        return _as_decimal(self.product["price"])

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Cart:
    def __init__(self):
        self._lines: dict[int, CartLine] = {}
        # Last snapshot seen per product, so a removed line can come back
        self._snapshots: dict[int, Mapping[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: int) -> bool:
        return product_id in self._lines

    def __iter__(self):
        return iter(self.lines)

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def quantity_of(self, product_id: int) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line else 0

    def add(self, product: Mapping[str, Any]) -> CartLine:
        """Add one unit of ``product``, creating the line if needed."""
        product_id = product["id"]
        self._snapshots[product_id] = dict(product)
        line = self._lines.get(product_id)
        if line is None:
            line = self._lines[product_id] = CartLine(product=self._snapshots[product_id], quantity=1)
        else:
            line.quantity += 1
        return line

    def change_quantity(self, product_id: int, delta: int) -> CartLine | None:
        """Shift a line's quantity by ``delta``.

        Returns the line, or None once it has been removed. Raising the
        quantity of a removed line recreates it from its last snapshot.
        """
        line = self._lines.get(product_id)
        if line is None:
            if delta <= 0:
                return None
            if product_id not in self._snapshots:
                raise KeyError(product_id)
            line = self._lines[product_id] = CartLine(product=self._snapshots[product_id], quantity=0)

        line.quantity = max(0, line.quantity + delta)
        if line.quantity == 0:
            del self._lines[product_id]
            return None
        return line

    def remove(self, product_id: int):
        self._lines.pop(product_id, None)

    def clear(self):
        self._lines.clear()
        self._snapshots.clear()

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines.values()), Decimal("0"))

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def grand_total(self, delivery_option: str = "pickup", delivery_fee: Decimal = DEFAULT_DELIVERY_FEE) -> Decimal:
        if delivery_option == "delivery":
            return self.total + delivery_fee
        return self.total

    def to_order_items(self) -> list[dict]:
        return [
            {"product_id": line.product_id, "quantity": line.quantity, "price": str(line.price)}
            for line in self._lines.values()
        ]
