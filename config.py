import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Auth sessions
    SESSION_TTL_HOURS = data.get("SESSION_TTL_HOURS", 24)

    # Invoice numbering
    DEFAULT_INVOICE_PREFIX = data.get("DEFAULT_INVOICE_PREFIX", "INV")
    INVOICE_NUMBER_MAX_ATTEMPTS = data.get("INVOICE_NUMBER_MAX_ATTEMPTS", 5)
    INVOICE_NUMBER_BACKOFF_MS = data.get("INVOICE_NUMBER_BACKOFF_MS", 100)

    # Notifications (chat webhook, fire-and-forget)
    NOTIFICATION_WEBHOOK_URL = data.get("NOTIFICATION_WEBHOOK_URL", None)

    # Recurring invoice worker
    RECURRING_INVOICES_ENABLED = bool(data.get("RECURRING_INVOICES_ENABLED", True))
    RECURRING_INVOICES_INTERVAL_SECONDS = data.get("RECURRING_INVOICES_INTERVAL_SECONDS", 3600)

    # Fernet key (urlsafe base64, 32 bytes) for API key secrets
    API_KEY_ENCRYPTION_KEY = data.get("API_KEY_ENCRYPTION_KEY", "")
