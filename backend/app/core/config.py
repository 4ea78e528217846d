from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./resume_builder.db"

    # JWT Authentication
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60  # 7 days

    # Google Gemini API
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # ImageKit (profile pictures)
    IMAGEKIT_PRIVATE_KEY: str = ""
    IMAGEKIT_UPLOAD_URL: str = "https://upload.imagekit.io/api/v1/files/upload"
    IMAGEKIT_FILES_URL: str = "https://api.imagekit.io/v1/files"
    IMAGEKIT_FOLDER: str = "user-resumes"

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_IMAGE_SIZE: int = 5 * 1024 * 1024  # 5 MB
    REQUEST_TIMEOUT_SECONDS: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Application
    APP_NAME: str = "Resume Builder"
    DEBUG: bool = True
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:5173,"
        "http://127.0.0.1:5173"
    )


settings = Settings()
