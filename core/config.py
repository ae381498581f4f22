from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Open Trivia DB
    OPENTDB_BASE_URL: str = Field("https://opentdb.com", description="Base URL of the Open Trivia DB API")
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # Quiz Settings
    DEFAULT_QUESTION_COUNT: int = 10
    MIN_QUESTIONS: int = 1
    MAX_QUESTIONS: int = 50
    DEFAULT_TIMER_SECONDS: int = 120
    MIN_TIMER_SECONDS: int = 30
    MAX_TIMER_SECONDS: int = 300
    TIMER_TICK_SECONDS: float = Field(1.0, description="Interval between countdown ticks")

    # Environment
    LOG_LEVEL: str = "INFO"
    ENV: str = "production"  # development, staging, production
    DEBUG: bool = False

settings = Settings()
