from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    APP_NAME: str = "Hospital Administration Dashboard"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]

    # Sample patients, wards, invoices... for local development only
    DEV_FIXTURES_ENABLED: bool = False

    # Billing
    CURRENCY: str = "INR"
    TAX_RATE: float = 0.18  # GST applied to invoice subtotals

    # Reports
    RECENT_REPORTS_LIMIT: int = 10

    class Config:
        env_file = ".env"


settings = Settings()
