import logging

from stockroom.core.constants import NOTIFICATION_LOW_STOCK, NOTIFICATION_OUT_OF_STOCK
from stockroom.core.stock_rules import is_low_stock, is_out_of_stock

logger = logging.getLogger(__name__)


def threshold_alert(previous, updated):
    """Describe the notification a stock change calls for, if any.

    Only crossings count: a product that was already low does not raise a
    second low-stock alert on every further sale.
    """
    if is_out_of_stock(updated.quantity) and not is_out_of_stock(previous.quantity):
        return {
            "type": NOTIFICATION_OUT_OF_STOCK,
            "title": "Out of Stock Alert",
            "message": "{} is out of stock and needs immediate restocking".format(updated.name),
            "productId": updated.id,
        }
    if is_low_stock(updated.quantity, updated.reorder_level) and not is_low_stock(
        previous.quantity, previous.reorder_level
    ):
        return {
            "type": NOTIFICATION_LOW_STOCK,
            "title": "Low Stock Alert",
            "message": "{} is running low on stock ({} units remaining)".format(
                updated.name, updated.quantity
            ),
            "productId": updated.id,
        }
    return None


def notify_threshold_crossing(notifications, tenant_id, previous, updated, *, deadline=None):
    alert = threshold_alert(previous, updated)
    if alert is None:
        return None
    logger.info(
        "Stock of %s crossed its threshold (%s -> %s)",
        updated.id,
        previous.quantity,
        updated.quantity,
        extra={"tenant_id": tenant_id},
    )
    return notifications.create(tenant_id, alert, deadline=deadline)
