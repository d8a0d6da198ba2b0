"""
Pytest fixtures for the compgraph test suite.

Components are built through ``Component.model_validate`` so that tests
exercise the same parsing path as data loaded from the database file.
"""

from collections.abc import Callable
from typing import Any

import pytest

from compgraph.models import Component


@pytest.fixture
def make_component() -> Callable[..., Component]:
    """Factory for components with endpoint defaults."""

    def _make(
        id: str,
        name: str | None = None,
        type: str = "endpoint",
        input: dict[str, Any] | None = None,
        output: dict[str, Any] | None = None,
        consumes: list[str] | None = None,
        mappings: Any = None,
    ) -> Component:
        return Component.model_validate(
            {
                "id": id,
                "name": name or id.upper(),
                "type": type,
                "input": input,
                "output": output,
                "consumes": consumes,
                "mappings": mappings,
            }
        )

    return _make


@pytest.fixture
def order_components(make_component) -> list[Component]:
    """Checkout endpoint consuming a payment endpoint and a customer table."""
    return [
        make_component(
            "checkout",
            name="Checkout",
            input={"order_id": "o-1", "customer": {"id": 7}},
            consumes=["payment", "customers"],
            mappings=[
                {
                    "target_component_id": "payment",
                    "target_field": "amount",
                    "source_field": "total",
                    "source_component_id": "pricing",
                }
            ],
        ),
        make_component(
            "payment",
            name="Payment",
            input={"order_id": "o-1", "amount": 10.5, "customer": {"id": 7}},
            output={"receipt": "r-1"},
        ),
        make_component(
            "customers",
            name="Customers",
            type="database_table",
            input={"secret": "never required"},
            output={"id": 7, "email": "a@example.com"},
        ),
        make_component(
            "pricing",
            name="Pricing",
            output={"total": 10.5, "currency": "EUR"},
        ),
    ]
