import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="RETAILBILL_", extra="ignore")

    # Printed invoice row capacities per page role
    rows_single: int = 18
    rows_first: int = 30
    rows_middle: int = 32
    rows_last: int = 24

    trash_retention_hours: int = 24
    default_unit: str = "pcs"

    company_name: str = "Retail Billing"

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
