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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./docshare.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    LINK_GRANT_TTL_MINUTES = int(data.get("LINK_GRANT_TTL_MINUTES", 60))

    # Access cache
    CACHE_BACKEND = data.get("CACHE_BACKEND", "redis")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    CACHE_KEY_PREFIX = data.get("CACHE_KEY_PREFIX", "docshare")
    CACHE_MAX_LISTING_PAGES = int(data.get("CACHE_MAX_LISTING_PAGES", 10))
    CACHE_FILE_INFO_TTL = int(data.get("CACHE_FILE_INFO_TTL", 600))
    CACHE_FILE_USERS_TTL = int(data.get("CACHE_FILE_USERS_TTL", 300))
    CACHE_USER_ROLE_TTL = int(data.get("CACHE_USER_ROLE_TTL", 300))
    CACHE_FILE_LIST_TTL = int(data.get("CACHE_FILE_LIST_TTL", 180))
    CACHE_ANNOTATIONS_TTL = int(data.get("CACHE_ANNOTATIONS_TTL", 600))

    # Documents
    STORAGE_DIR = data.get("STORAGE_DIR", os.path.join(ROOT_PATH, "uploads"))
    MAX_UPLOAD_BYTES = int(data.get("MAX_UPLOAD_BYTES", 20 * 1024 * 1024))
    FILES_PER_PAGE = int(data.get("FILES_PER_PAGE", 10))

    # Notifications
    NOTIFIER_BACKEND = data.get("NOTIFIER_BACKEND", "log")
    SMTP_HOST = data.get("SMTP_HOST", "localhost")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    SMTP_FROM_ADDRESS = data.get("SMTP_FROM_ADDRESS", "no-reply@docshare.local")
