# coursehub/config.py
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./coursehub.db"

    # JWT & Security
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = "7d"
    BCRYPT_ROUNDS: int = 10
    RESET_CODE_EXPIRE_MINUTES: int = 15

    # Email (SMTP)
    EMAIL_HOST: str = "smtp.gmail.com"
    EMAIL_PORT: int = 587
    EMAIL_SECURE: bool = False  # True for implicit TLS (465)
    EMAIL_USER: Optional[str] = None
    EMAIL_PASSWORD: Optional[str] = None

    # Platform
    PLATFORM_NAME: str = "Student Course Management System"
    FRONTEND_URL: str = "http://localhost:5173"
    SUPPORT_EMAIL: str = "support@example.com"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # Runtime
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

settings = Settings()
