from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Request limits applied by the API and CLI before the engine runs
    enforce_request_limits: bool = True
    max_years: int = 100
    max_interest_percent: Decimal = Decimal("1000")

    # Engine-level row cap. None = no cap (payment-only schedules run to payoff)
    max_schedule_periods: int | None = None


settings = Settings()
