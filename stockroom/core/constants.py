KEY_ROOT = "user"
KEY_SEPARATOR = ":"

ENTITY_PRODUCT = "product"
ENTITY_NOTIFICATION = "notification"
ENTITY_META = "meta"
ENTITY_KINDS = (ENTITY_PRODUCT, ENTITY_NOTIFICATION, ENTITY_META)

NOTIFICATION_LOW_STOCK = "low_stock"
NOTIFICATION_OUT_OF_STOCK = "out_of_stock"
NOTIFICATION_REORDER = "reorder"
NOTIFICATION_SYSTEM = "system"
NOTIFICATION_TYPES = (
    NOTIFICATION_LOW_STOCK,
    NOTIFICATION_OUT_OF_STOCK,
    NOTIFICATION_REORDER,
    NOTIFICATION_SYSTEM,
)

STOCK_STATUS_LOW = "Low Stock"
STOCK_STATUS_MEDIUM = "Medium"
STOCK_STATUS_GOOD = "Good"
STOCK_STATUSES = (STOCK_STATUS_LOW, STOCK_STATUS_MEDIUM, STOCK_STATUS_GOOD)

MEDIUM_STOCK_FACTOR = 1.5
MIN_RESTOCK_UNITS = 10

SAMPLE_DATA_LOCK_ID = "sample-data"
