"""Use case for placing an order."""

from typing import Protocol

from shop.domain.order import Order


class OrderStore(Protocol):
    def save(self, order: Order) -> None: ...


def place_order(store: OrderStore, order_id: str, total: int) -> Order:
    order = Order(order_id=order_id, total=total)
    store.save(order)
    return order
