"""Shared BDD fixtures and step definitions for orders and checkout."""

import pytest
from bookhub.ordering.order.store import OrderStore
from bookhub.payments.gateway import set_gateway
from bookhub.payments.gateway.fake_adapter import FakeGateway
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def orders(storage):
    return OrderStore(storage)


@pytest.fixture()
def gateway():
    gateway = FakeGateway()
    set_gateway(gateway)
    return gateway


# ---------------------------------------------------------------------------
# Given steps: orders
# ---------------------------------------------------------------------------
@given("a pending order", target_fixture="order_id")
def _(orders, shipping_address):
    order = orders.create_order(
        user_id="user-1",
        items=[{"id": "1", "title": "Pride and Prejudice", "price": 299.0, "quantity": 1}],
        total_amount=352.82,
        shipping_address=shipping_address,
        payment_id="pay-001",
    )
    return order.id


@given("the order was shipped")
@given("the order was delivered")
def _(orders, order_id):
    assert orders.advance_order(order_id).success


@given("the order was cancelled")
def _(orders, order_id):
    assert orders.cancel_order(order_id).success


# ---------------------------------------------------------------------------
# Given steps: checkout
# ---------------------------------------------------------------------------
@given("the customer is logged in")
def _(storefront):
    assert storefront.identity.login("user@test.com", "password123").success


@given(
    parsers.re(r'the cart holds (?P<quantity>\d+) cop(?:y|ies) of book "(?P<book_id>[^"]+)"'),
    converters={"quantity": int},
)
def _(storefront, quantity, book_id):
    storefront.cart.add_to_cart(storefront.catalog.get_book_by_id(book_id), quantity)


@given("the payment gateway declines payments")
def _(gateway):
    gateway.configure(should_succeed=False, failure_reason="Card declined")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(orders, order_id, status):
    assert orders.get_order(order_id).status == status


@then(parsers.cfparse('the action fails with "{error}"'))
@then(parsers.cfparse('the checkout fails with "{error}"'))
def _(result, error):
    assert not result.success
    assert result.error.value == error


@then(parsers.cfparse("the cart holds {count:d} items"))
def _(storefront, count):
    assert storefront.cart.get_item_count() == count


@then("the cart is empty")
def _(storefront):
    assert storefront.cart.is_empty
