from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "TABLEKIT"
    CUSTOMERS_SEED_ROWS: int = 500
    CUSTOMERS_DEFAULT_PAGE_SIZE: int = 10
    CUSTOMERS_MAX_PAGE_SIZE: int = 100
    CORS_ALLOW_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


settings = Settings()
