import os

from ..core.constants import DEFAULT_IP_LOOKUP_TIMEOUT, DEFAULT_IP_LOOKUP_URL, DEFAULT_QR_TOKEN

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeguard"),
}

# Decoded text of the printed office QR code
QR_TOKEN = os.getenv("QR_TOKEN", DEFAULT_QR_TOKEN)

# 'request' uses the remote address (or proxy headers, see below), 'public' asks IP_LOOKUP_URL
IP_LOOKUP = os.getenv("IP_LOOKUP", "request")
IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", DEFAULT_IP_LOOKUP_URL)
IP_LOOKUP_TIMEOUT = float(os.getenv("IP_LOOKUP_TIMEOUT", str(DEFAULT_IP_LOOKUP_TIMEOUT)))
# Only enable behind a reverse proxy that sets X-Real-IP / X-Forwarded-For itself
TRUST_PROXY_HEADERS = bool(int(os.getenv("TRUST_PROXY_HEADERS", "0")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo users on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
