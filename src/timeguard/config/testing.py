import os

from ..core.constants import DEFAULT_IP_LOOKUP_URL, DEFAULT_QR_TOKEN

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeguard_test"),
}

QR_TOKEN = DEFAULT_QR_TOKEN

IP_LOOKUP = "request"
IP_LOOKUP_URL = DEFAULT_IP_LOOKUP_URL
IP_LOOKUP_TIMEOUT = 1.0
TRUST_PROXY_HEADERS = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
