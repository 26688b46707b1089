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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./sessions.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    ENABLE_SWEEPER = bool(data.get("ENABLE_SWEEPER", False))
    SWEEP_INTERVAL_SECONDS = int(data.get("SWEEP_INTERVAL_SECONDS", 60))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
