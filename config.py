import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./sales.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Sales defaults
    DEFAULT_VAT_PERCENT = data.get("DEFAULT_VAT_PERCENT", 15)
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "SAR")

    # Seller identity printed in the ZATCA QR code of tax invoices
    COMPANY_NAME = data.get("COMPANY_NAME", "My Company")
    COMPANY_VAT_NUMBER = data.get("COMPANY_VAT_NUMBER", "300000000000003")

    # Document expiry worker
    DOCUMENT_EXPIRY_ENABLED = bool(data.get("DOCUMENT_EXPIRY_ENABLED", True))
    DOCUMENT_EXPIRY_INTERVAL_SECONDS = data.get("DOCUMENT_EXPIRY_INTERVAL_SECONDS", 86400)  # Daily
