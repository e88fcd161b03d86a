"""Runtime settings.

Values are read once from the environment (prefix ``DBMETRICS_``) when the
module is imported.  Tests and embedding applications may construct their own
``Settings`` instance and pass it to ``build_metrics_service``.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the metrics instrumentation.

    Attributes:
        METRICS_NAMESPACE: Prefix for every exported metric name.
        LOG_LEVEL: Level applied to the ``dbmetrics`` logger.
        QUERY_EVENT_CHANNEL: Event bus channel carrying executed-query events.
    """

    model_config = SettingsConfigDict(env_prefix="DBMETRICS_", case_sensitive=True)

    METRICS_NAMESPACE: str = "sqlalchemy"
    LOG_LEVEL: str = "INFO"
    QUERY_EVENT_CHANNEL: str = "sql.query"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()


settings = Settings()
