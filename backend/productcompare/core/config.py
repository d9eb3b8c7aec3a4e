from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central settings object.
    Deployments provide env vars; locally you can use backend/.env.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # ScrapingDog product API
    # API_KEY is the name older deployments keep in .env
    SCRAPINGDOG_API_KEY: str = Field("", validation_alias=AliasChoices("SCRAPINGDOG_API_KEY", "API_KEY"))
    SCRAPINGDOG_BASE_URL: str = "https://api.scrapingdog.com/amazon/product"
    SCRAPINGDOG_DOMAIN: str = "com"
    SCRAPINGDOG_COUNTRY: str = "us"
    SCRAPINGDOG_TIMEOUT: float = 60.0

    # Sentiment synthesis thresholds (average rating)
    POSITIVE_SENTIMENT_RATING: float = 4.0
    MIXED_SENTIMENT_RATING: float = 3.0

    # Review list view state
    REVIEWS_INITIAL_VISIBLE: int = 10
    REVIEWS_LOAD_MORE_STEP: int = 3
    REVIEW_EXPAND_CHARS: int = 150

    LOG_LEVEL: str = "INFO"

    # Versioning
    APP_VERSION: str = "0.1.0"
    BUILD_ID: str = "dev"


# other modules import this
settings = Settings()
