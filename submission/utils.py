from datetime import datetime, timezone

LOG_PREFIX = "[SUBMIT]"


def log(*args):
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"{LOG_PREFIX} [{timestamp}]", *args, flush=True)


def utc_timestamp(now=None):
    """ISO8601 UTC with millisecond precision and a trailing Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
