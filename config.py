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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./clinic.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Sessions
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "session_token")
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", False))
    STAFF_SESSION_HOURS = data.get("STAFF_SESSION_HOURS", 24)
    PATIENT_SESSION_DAYS = data.get("PATIENT_SESSION_DAYS", 7)
    OTP_TTL_MINUTES = data.get("OTP_TTL_MINUTES", 10)
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 12)

    # Housekeeping
    CLEANUP_SECRET = data.get("CLEANUP_SECRET", "")
    SESSION_CLEANUP_INTERVAL_SECONDS = data.get("SESSION_CLEANUP_INTERVAL_SECONDS", 0)
    RATE_LIMIT_SWEEP_INTERVAL_SECONDS = data.get("RATE_LIMIT_SWEEP_INTERVAL_SECONDS", 300)

    # Proxy (enable only behind a proxy that overwrites X-Forwarded-For)
    TRUST_PROXY_HEADERS = bool(data.get("TRUST_PROXY_HEADERS", False))

    # Rate limits (interval in milliseconds)
    LOGIN_RATE_LIMIT_INTERVAL_MS = data.get("LOGIN_RATE_LIMIT_INTERVAL_MS", 15 * 60 * 1000)
    LOGIN_RATE_LIMIT_MAX_REQUESTS = data.get("LOGIN_RATE_LIMIT_MAX_REQUESTS", 5)
    OTP_SEND_RATE_LIMIT_INTERVAL_MS = data.get("OTP_SEND_RATE_LIMIT_INTERVAL_MS", 10 * 60 * 1000)
    OTP_SEND_RATE_LIMIT_MAX_REQUESTS = data.get("OTP_SEND_RATE_LIMIT_MAX_REQUESTS", 3)
    OTP_VERIFY_RATE_LIMIT_INTERVAL_MS = data.get(
        "OTP_VERIFY_RATE_LIMIT_INTERVAL_MS", 10 * 60 * 1000
    )
    OTP_VERIFY_RATE_LIMIT_MAX_REQUESTS = data.get("OTP_VERIFY_RATE_LIMIT_MAX_REQUESTS", 5)
