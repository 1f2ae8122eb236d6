"""BDD tests for order lifecycle."""

from pytest_bdd import parsers, scenarios, when

scenarios("features/order_lifecycle.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the customer cancels the order", target_fixture="result")
def _(orders, order_id):
    return orders.cancel_order(order_id)


@when("the administrator advances the order", target_fixture="result")
def _(orders, order_id):
    return orders.advance_order(order_id)


@when(parsers.cfparse('the administrator sets the status to "{status}"'), target_fixture="result")
def _(orders, order_id, status):
    return orders.update_order_status(order_id, status)
