from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"
    LOG_LEVEL: str = "INFO"

    # Broker side: the job type served and where completions are sent
    JOB_TYPE: str = "http"
    BROKER_COMPLETE_TASK: str = "broker.complete_job"
    BROKER_FAIL_TASK: str = "broker.fail_job"
    BROKER_THROW_ERROR_TASK: str = "broker.throw_error"

    # Remote configuration variables
    ENV_VARS_URL: Optional[str] = None
    ENV_VARS_RELOAD_RATE: int = 15000  # milliseconds
    ENV_VARS_M2M_BASE_URL: Optional[str] = None
    ENV_VARS_M2M_CLIENT_ID: Optional[str] = None
    ENV_VARS_M2M_CLIENT_SECRET: Optional[str] = None
    ENV_VARS_M2M_AUDIENCE: Optional[str] = None

    # Local environment variables, used when no remote URL is set
    LOCAL_ENV_VARS_PREFIX: str = "ZURI_ENV_"
    LOCAL_ENV_VARS_REMOVE_PREFIX: bool = True

    # Outbound HTTP call bounds, in seconds
    CONNECTION_TIMEOUT: float = 20
    RESPONSE_TIMEOUT: float = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
REDIS_URL = settings.REDIS_URL
BROKER_URL = REDIS_URL
RESULT_BACKEND = REDIS_URL
