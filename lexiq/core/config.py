"""
Configuration management using Pydantic settings.
"""
from typing import List, Union
import os
from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Lexiq Progression Engine"
    DEBUG: bool = True
    ENV: str = os.getenv("ENV", "development")

    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./lexiq.db")

    # JWT Configuration (tokens are issued by the identity service)
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    TOKEN_URL: str = os.getenv("TOKEN_URL", "/api/v1/auth/login")

    # Progression Configuration
    LOCK_BYPASS_ROLES: List[str] = ["admin", "content_creator"]
    LEADERBOARD_SIZE: int = int(os.getenv("LEADERBOARD_SIZE", 50))

    # CORS Configuration
    BACKEND_CORS_ORIGINS: Union[List[AnyHttpUrl], str] = "*"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if v == "*" or v == ["*"]:
            return "*"
        if isinstance(v, str):
            return [i.strip() for i in v.split(",")]
        return v

    @field_validator("LOCK_BYPASS_ROLES", mode="before")
    @classmethod
    def split_roles(cls, v):
        if isinstance(v, str):
            return [role.strip() for role in v.split(",") if role.strip()]
        return v

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = True


settings = Settings()
