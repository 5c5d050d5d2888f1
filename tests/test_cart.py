from decimal import Decimal

import pytest

from storefront.cart import Cart

MATHS = {"id": 1, "title": "Spotlight Mathematics", "price": "650.00"}
ENGLISH = {"id": 2, "title": "Excel English", "price": 480}


def test_add_increments_existing_line():
    cart = Cart()
    cart.add(MATHS)
    cart.add(MATHS)
    cart.add(ENGLISH)

    assert cart.quantity_of(1) == 2
    assert cart.quantity_of(2) == 1
    assert [line.product_id for line in cart] == [1, 2]


def test_totals_follow_current_lines():
    cart = Cart()
    cart.add(MATHS)
    cart.add(MATHS)
    cart.add(ENGLISH)

    assert cart.total == Decimal("1780")
    assert cart.count == 3

    cart.change_quantity(1, -1)
    assert cart.total == Decimal("1130")
    assert cart.count == 2


def test_quantity_reaching_zero_removes_line():
    cart = Cart()
    cart.add(MATHS)
    cart.add(ENGLISH)

    assert cart.change_quantity(1, -5) is None

    assert 1 not in cart
    assert all(line.quantity >= 1 for line in cart)
    assert cart.count == 1


def test_decrement_then_increment_restores_quantity():
    cart = Cart()
    for _ in range(3):
        cart.add(MATHS)

    cart.change_quantity(1, -3)
    assert 1 not in cart

    cart.change_quantity(1, 3)
    assert cart.quantity_of(1) == 3
    assert cart.lines[0].title == "Spotlight Mathematics"


def test_change_quantity_of_unknown_product():
    cart = Cart()

    assert cart.change_quantity(7, -1) is None
    with pytest.raises(KeyError):
        cart.change_quantity(7, 1)


def test_grand_total_adds_delivery_fee():
    cart = Cart()
    cart.add(ENGLISH)

    assert cart.grand_total("pickup") == Decimal("480")
    assert cart.grand_total("delivery") == Decimal("680")
    assert cart.grand_total("delivery", delivery_fee=Decimal("150")) == Decimal("630")


def test_order_items_carry_price_snapshot():
    cart = Cart()
    cart.add(MATHS)
    cart.add(MATHS)

    assert cart.to_order_items() == [{"product_id": 1, "quantity": 2, "price": "650.00"}]


def test_clear_empties_cart():
    cart = Cart()
    cart.add(MATHS)
    cart.clear()

    assert len(cart) == 0
    assert cart.total == Decimal("0")
    with pytest.raises(KeyError):
        cart.change_quantity(1, 1)
