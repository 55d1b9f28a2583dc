from typing import Any, Dict

from webshop.domain.order import Order


def order_event(event: str, order: Order, reason: str | None = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "event": event,
        "order_id": str(order.id),
        "user_id": order.user_id,
        "status": order.status.value,
        "shipping_option": order.shipping_option,
        "payment_method": order.payment_method,
        "total_amount": float(order.total_amount),
        "items": [
            {
                "item_id": i.item_id,
                "item_name": i.item_name,
                "quantity": i.quantity,
                "unit_price": float(i.unit_price),
            }
            for i in order.items
        ],
    }
    if reason:
        payload["reason"] = reason
    return payload
