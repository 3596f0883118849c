from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root (parent of testgen/) for .env loading
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.
    """

    # Core app settings
    app_name: str = Field(default="api_testcase_generator")
    environment: str = Field(default="development")  # development | staging | production
    debug: bool = Field(default=False)

    # HTTP server
    api_prefix: str = Field(default="/api")

    # Observability
    log_level: str = Field(default="INFO")

    # Step suggestion backend ("default" is the only built-in one)
    default_suggester: str = Field(
        default="default",
        description="Backend used to propose additional steps for the general focus.",
    )
    ai_enhancement_enabled: bool = Field(
        default=False,
        description="Run the general enhancement pass after every generation.",
    )

    # Page analysis
    spa_keywords: List[str] = Field(
        default_factory=lambda: ["spa", "app", "angular", "react", "vue"],
        description="URL fragments that mark a page as a single page application.",
    )
    default_page_name: str = Field(
        default="Page",
        description="Page name used in test case descriptions when none is given.",
    )

    model_config = SettingsConfigDict(
        env_prefix="TESTGEN_",
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached settings instance for use as a dependency.
    """
    return Settings()
