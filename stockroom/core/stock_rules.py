from stockroom.core.constants import (
    MEDIUM_STOCK_FACTOR,
    MIN_RESTOCK_UNITS,
    STOCK_STATUS_GOOD,
    STOCK_STATUS_LOW,
    STOCK_STATUS_MEDIUM,
    STOCK_STATUSES,
)


def clamp_quantity(quantity, delta):
    """Apply a stock delta, flooring the result at zero."""
    return max(0, quantity + delta)


def is_low_stock(quantity, reorder_level):
    return quantity <= reorder_level


def is_out_of_stock(quantity):
    return quantity <= 0


def stock_status(quantity, reorder_level):
    if is_low_stock(quantity, reorder_level):
        return STOCK_STATUS_LOW
    if quantity <= reorder_level * MEDIUM_STOCK_FACTOR:
        return STOCK_STATUS_MEDIUM
    return STOCK_STATUS_GOOD


def restock_amount(reorder_level):
    return max(MIN_RESTOCK_UNITS, reorder_level * 2)


def summarize_inventory(products):
    summary = {
        "totalProducts": 0,
        "lowStockCount": 0,
        "outOfStockCount": 0,
        "totalUnits": 0,
        "totalValue": 0.0,
        "statusCounts": {status: 0 for status in STOCK_STATUSES},
    }
    for product in products:
        summary["totalProducts"] += 1
        summary["totalUnits"] += product.quantity
        summary["totalValue"] += product.quantity * product.price
        if is_low_stock(product.quantity, product.reorder_level):
            summary["lowStockCount"] += 1
        if is_out_of_stock(product.quantity):
            summary["outOfStockCount"] += 1
        summary["statusCounts"][stock_status(product.quantity, product.reorder_level)] += 1
    summary["totalValue"] = round(summary["totalValue"], 2)
    return summary
