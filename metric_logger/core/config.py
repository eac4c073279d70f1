import os


class Settings:
    # Library Settings
    PROJECT_NAME: str = "Aggregate Metric Logger"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = os.getenv("METRIC_LOGGER_LOG_LEVEL", "INFO").upper()

    # Metric Logger Settings
    METRIC_LOGGER_ENABLED: bool = os.getenv("METRIC_LOGGER_ENABLED", "false").lower() == "true"
    METRIC_LOGGER_NAMESPACE: str = os.getenv("METRIC_LOGGER_NAMESPACE", "aggregate-metric-logger")
    METRIC_LOGGER_IN_PROGRESS_WARNING_LIMIT: int = int(
        os.getenv("METRIC_LOGGER_IN_PROGRESS_WARNING_LIMIT", 10000)
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build a Settings instance from the current process environment.

        Class attributes are evaluated once at import time; this re-reads them
        so tests and long-running processes can pick up changed variables.
        """
        instance = cls()
        instance.LOG_LEVEL = os.getenv("METRIC_LOGGER_LOG_LEVEL", "INFO").upper()
        instance.METRIC_LOGGER_ENABLED = os.getenv("METRIC_LOGGER_ENABLED", "false").lower() == "true"
        instance.METRIC_LOGGER_NAMESPACE = os.getenv("METRIC_LOGGER_NAMESPACE", "aggregate-metric-logger")
        instance.METRIC_LOGGER_IN_PROGRESS_WARNING_LIMIT = int(
            os.getenv("METRIC_LOGGER_IN_PROGRESS_WARNING_LIMIT", 10000)
        )
        return instance


settings = Settings()
