# trade_alerts/utils.py

import hashlib
import time
from trade_alerts.config import HASH_PREFIX

def generate_hash(user_id, symbol, price_level, prefix=HASH_PREFIX, unixtime=None):
    """
    Builds the client-side identifier of a new alert.
    The current unix time is mixed in so the same user can set the same level twice.
    """
    if unixtime is None:
        unixtime = int(time.time())
    hasher = hashlib.sha256()
    hasher.update(str(unixtime).encode())
    hasher.update(str(user_id).encode())
    hasher.update(str(symbol).encode())
    hasher.update(str(price_level).encode())
    return f"{prefix}{hasher.hexdigest()}"
