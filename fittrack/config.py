"""
Application settings
"""
from typing import Tuple
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "FitTrack"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str
    DB_RETRY_ATTEMPTS: int = 3
    DB_RETRY_INITIAL_DELAY: float = 1.0

    # JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # Food estimate (google | openrouter)
    FOOD_ESTIMATE_PROVIDER: str = "google"
    GOOGLE_API_KEY: str = ""
    OPENROUTER_API_KEY: str = ""
    FOOD_ESTIMATE_MODEL: str = "gemini-2.0-flash"
    FOOD_ESTIMATE_MIN_MATCHES: int = 3

    # Default nutrition targets when the profile is incomplete
    DEFAULT_TARGET_CALORIES: int = 2000
    DEFAULT_TARGET_PROTEIN: int = 150
    DEFAULT_TARGET_CARBS: int = 200
    DEFAULT_TARGET_FATS: int = 65

    # Uploads
    UPLOAD_DIR: str = "uploads"
    AVATAR_MAX_BYTES: int = 5 * 1024 * 1024
    AVATAR_SIZE: int = 256

    # Scheduler
    SCHEDULER_ENABLED: bool = True

    # Calendar day boundaries for streaks and daily logs
    TZ: str = "UTC"

    # CORS (JSON list in ALLOWED_ORIGINS)
    ALLOWED_ORIGINS: list = [
        "http://localhost:3000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def default_nutrition_targets(self) -> Tuple[int, int, int, int]:
        """(calories, protein, carbs, fats) used when nothing can be calculated"""
        return (
            self.DEFAULT_TARGET_CALORIES,
            self.DEFAULT_TARGET_PROTEIN,
            self.DEFAULT_TARGET_CARBS,
            self.DEFAULT_TARGET_FATS,
        )


settings = Settings()
