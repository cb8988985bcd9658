import json
from datetime import datetime, timezone

def log_event(level, message, **context):
    """
    Logs events in a structured JSON format with a given level and message.
    Additional context can be provided as keyword arguments; values that are
    not JSON serializable are logged through str().
    """
    log = {"level": level, "message": message, "ts": datetime.now(timezone.utc).isoformat()}
    log.update(context)
    print(json.dumps(log, default=str))
