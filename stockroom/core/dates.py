from datetime import datetime, timezone


def utc_now():
    return datetime.now(timezone.utc)


def isoformat(value):
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        if value_text.endswith("Z"):
            value_text = value_text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(value_text)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None
