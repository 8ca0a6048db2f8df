import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./clinic.db")

SESSION_SECRET = os.getenv("SESSION_SECRET", "local-dev-secret")
SESSION_ALGORITHM = os.getenv("SESSION_ALGORITHM", "HS256")
SESSION_TTL_MINUTES = int(os.getenv("SESSION_TTL_MINUTES", str(7 * 24 * 60)))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session")
SESSION_COOKIE_SECURE = _get_bool(os.getenv("SESSION_COOKIE_SECURE"), default=False)

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), ["http://localhost:5173"])

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@clinic.com")
SEED_ON_STARTUP = _get_bool(os.getenv("SEED_ON_STARTUP"), default=True)

def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and SESSION_SECRET == "local-dev-secret":
        raise RuntimeError("SESSION_SECRET must be set in production.")
