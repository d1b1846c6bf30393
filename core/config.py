from pydantic_settings import BaseSettings
from pydantic import ConfigDict

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env")

    ENV: str = "development"

    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    TOKEN_AUDIENCE: str | None = None
    STRIPE_SECRET_KEY: str = ""
    PAYMENT_CURRENCY: str = "usd"
    CLIENT_URL: str = "http://localhost:5173"
    OPERATOR_ROLES: list[str] = ["admin", "librarian"]
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]


settings = Settings()
