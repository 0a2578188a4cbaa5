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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    # "development" exposes raw persistence error text in API responses
    ENVIRONMENT = data.get("ENVIRONMENT", "production")

    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_ISSUER = data.get("JWT_ISSUER", "session-auth-service")
    JWT_AUDIENCE = data.get("JWT_AUDIENCE", "session-auth-clients")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 30))

    # 0 disables the cap; policy is "evict_oldest" or "reject"
    MAX_ACTIVE_SESSIONS = int(data.get("MAX_ACTIVE_SESSIONS", 10))
    SESSION_LIMIT_POLICY = data.get("SESSION_LIMIT_POLICY", "evict_oldest")
    SESSION_RETENTION_DAYS = int(data.get("SESSION_RETENTION_DAYS", 90))
    ACTIVITY_LOG_RETENTION_DAYS = int(data.get("ACTIVITY_LOG_RETENTION_DAYS", 90))

    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 8))

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
