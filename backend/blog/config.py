# blog/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Blog API"
    env: str = os.getenv("ENV", "dev")

    # Show raw exception messages in error bodies (never enable in production)
    debug: bool = _flag("APP_DEBUG", "false")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Pagination
    default_per_page: int = int(os.getenv("DEFAULT_PER_PAGE", "10"))
    max_per_page: int = int(os.getenv("MAX_PER_PAGE", "100"))

    # Rate limits (slowapi / limits syntax, per client address)
    rate_limit_enabled: bool = _flag("RATE_LIMIT_ENABLED", "true")
    register_rate_limit: str = os.getenv("REGISTER_RATE_LIMIT", "10/minute")
    login_rate_limit: str = os.getenv("LOGIN_RATE_LIMIT", "5/minute")
    rate_limit_storage_uri: str = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")  # e.g. redis://host:6379 when running several workers

    # Create tables on startup (development only, use Aerich migrations otherwise)
    generate_schemas: bool = _flag("GENERATE_SCHEMAS", "false")


settings = Settings()  # Instantiate configuration
