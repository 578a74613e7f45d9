from .transform import (
    flatten_order_node,
    flatten_product_node,
    flatten_orders,
    flatten_products,
    write_rows,
)

__all__ = [
    "flatten_order_node",
    "flatten_product_node",
    "flatten_orders",
    "flatten_products",
    "write_rows",
]
