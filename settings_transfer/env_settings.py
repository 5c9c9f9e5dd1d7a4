from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvSettings(BaseSettings):
    sqlite_path: str = Field("data/settings.db", alias="SQLITE_PATH")
    catalog_path: str = Field("catalog.json", alias="CATALOG_PATH")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: str = Field("data/logs", alias="LOG_DIR")
    log_retention_days: int = Field(30, alias="LOG_RETENTION_DAYS")

    max_import_bytes: int = Field(1 * 1024 * 1024, alias="MAX_IMPORT_BYTES")

    model_config = SettingsConfigDict(populate_by_name=True)


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
