from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Cinelog"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False

    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./cinelog.db"

    TMDB_KEY: str = ""
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_LANGUAGE: str = "es-ES"
    TMDB_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    # Upstream responses (search pages, movie details, collections)
    CACHE_TTL_SECONDS: int = Field(default=60, ge=0)
    # Genres and languages barely ever change
    REFERENCE_CACHE_TTL_SECONDS: int = Field(default=60 * 60 * 24, ge=0)
    SEARCH_FILTER_INVALID_MOVIES: bool = True

    LIST_PAGE_SIZE: int = Field(default=20, ge=1)
    POPULAR_LIMIT: int = Field(default=20, ge=1)

    ENABLE_FILE_LOGGING: bool = False
    LOG_DIR: str = "logs"
    LOG_TIMEZONE: str = "Europe/Madrid"


settings = Settings()
