from stockroom.services.sample_data import SeedResult, ensure_sample_data
from stockroom.services.stock_alerts import notify_threshold_crossing, threshold_alert

__all__ = [
    "SeedResult",
    "ensure_sample_data",
    "notify_threshold_crossing",
    "threshold_alert",
]
