import os

from ..core.constants import DEFAULT_IP_LOOKUP_TIMEOUT, DEFAULT_IP_LOOKUP_URL, DEFAULT_QR_TOKEN

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeguard"),
}

QR_TOKEN = os.getenv("QR_TOKEN", DEFAULT_QR_TOKEN)

IP_LOOKUP = os.getenv("IP_LOOKUP", "request")
IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", DEFAULT_IP_LOOKUP_URL)
IP_LOOKUP_TIMEOUT = float(os.getenv("IP_LOOKUP_TIMEOUT", str(DEFAULT_IP_LOOKUP_TIMEOUT)))
TRUST_PROXY_HEADERS = bool(int(os.getenv("TRUST_PROXY_HEADERS", "0")))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
