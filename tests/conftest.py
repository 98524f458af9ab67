"""Shared fixtures for the flow visualizer tests."""

import pytest

from layout import CommandEvent, FlowData, PolicyCommand, build_from_data


@pytest.fixture
def order_flow():
    """One command, one event, one policy pointing at an undeclared command."""
    return FlowData(
        command_events=(CommandEvent("PlaceOrder", ("OrderPlaced",)),),
        policy_commands=(PolicyCommand("NotifyWarehouse", "OrderPlaced", "ShipOrder"),),
    )


@pytest.fixture
def order_graph(order_flow):
    return build_from_data(order_flow)


@pytest.fixture
def shop_flow():
    return FlowData.from_dict({
        "commandEvents": [
            {"from": "PlaceOrder", "to": ["OrderPlaced", "PaymentRequested"]},
            {"from": "CapturePayment", "to": ["PaymentCaptured"]},
            {"from": "ShipOrder", "to": ["OrderShipped", "InvoiceIssued", "CustomerNotified"]},
            {"from": "CancelOrder", "to": ["OrderCancelled", "CustomerNotified"]},
        ],
        "policyCommands": [
            {"policy": "ChargeCustomer", "fromEvent": "PaymentRequested", "toCommand": "CapturePayment"},
            {"policy": "DispatchWhenPaid", "fromEvent": "PaymentCaptured", "toCommand": "ShipOrder"},
            {"policy": "CancelOnStockout", "fromEvent": "StockDepleted", "toCommand": "CancelOrder"},
            {"policy": "RefundOnCancel", "fromEvent": "OrderCancelled", "toCommand": "RefundPayment"},
        ],
    })
