from .query import (
    Condition,
    FindOptions,
    OrderBy,
    SortDirection,
    parse_order_by,
)

__all__ = [
    "Condition",
    "FindOptions",
    "OrderBy",
    "SortDirection",
    "parse_order_by",
]
