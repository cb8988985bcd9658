import os
from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.environ.get('SUPABASE_URL')
SUPABASE_KEY = os.environ.get('SUPABASE_KEY')
XYLEX_API_KEY = os.environ.get('XYLEX_API_KEY')
XYLEX_API_ENDPOINT = os.environ.get('XYLEX_API_ENDPOINT')
EMAIL_USER = os.environ.get('EMAIL_USER')
EMAIL_PASS = os.environ.get('EMAIL_PASS')

SMTP_HOST = os.environ.get("SMTP_HOST", 'smtp-auth.mailprotect.be')
SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))

# "xylex" (HTTP quote API) or "yahoo" (yfinance)
PRICE_PROVIDER = os.environ.get("PRICE_PROVIDER", "xylex").lower()
PRICE_TOLERANCE = float(os.environ.get("PRICE_TOLERANCE", "0.00001"))
QUOTE_WORKERS = int(os.environ.get("QUOTE_WORKERS", "1"))
HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "10"))

ALERTS_TABLE = os.environ.get("ALERTS_TABLE", "alerts")
ALERTS_SYMBOL_COLUMN = os.environ.get("ALERTS_SYMBOL_COLUMN", "symbol")
ALERTS_PRICE_LEVEL_COLUMN = os.environ.get("ALERTS_PRICE_LEVEL_COLUMN", "price_level")
ALERTS_USER_ID_COLUMN = os.environ.get("ALERTS_USER_ID_COLUMN", "user_id")
ALERTS_HASH_COLUMN = os.environ.get("ALERTS_HASH_COLUMN", "hash")
ALERTS_DIRECTION_COLUMN = os.environ.get("ALERTS_DIRECTION_COLUMN", "initial_direction")
ALERTS_ID_COLUMN = os.environ.get("ALERTS_ID_COLUMN", "id")
MAILING_TABLE = os.environ.get("MAILING_TABLE", "mailing_list")

HASH_PREFIX = os.environ.get("HASH_PREFIX", "xlx-a-")
