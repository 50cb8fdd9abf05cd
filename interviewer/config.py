"""Configuration management for API keys and settings."""

import os
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

# config.py is in interviewer/, .env is in project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

DEFAULT_SESSION_SECRET = "your-secret-key"


class Config:
    """Application configuration from environment variables."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "4000"))

    # Only this origin may call the API with credentials
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Session cookie
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", DEFAULT_SESSION_SECRET)
    SESSION_MAX_AGE_SECONDS: int = int(os.getenv("SESSION_MAX_AGE_SECONDS", str(24 * 60 * 60)))

    # Interviewer settings
    INTERVIEWER_TYPE: str = os.getenv("INTERVIEWER_TYPE", "gemini")

    # Gemini settings
    GOOGLE_API_KEY: Optional[str] = os.getenv("GOOGLE_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    GEMINI_TEMPERATURE: float = float(os.getenv("GEMINI_TEMPERATURE", "0.1"))
    GEMINI_MAX_OUTPUT_TOKENS: int = int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "1000"))
    GEMINI_TOP_P: float = float(os.getenv("GEMINI_TOP_P", "0.8"))
    GEMINI_TOP_K: int = int(os.getenv("GEMINI_TOP_K", "20"))
    # 0 disables the timeout
    GEMINI_TIMEOUT_SECONDS: float = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "60"))

    @classmethod
    def is_production(cls) -> bool:
        return cls.APP_ENV.lower() in {"prod", "production"}

    @classmethod
    def generation_config(cls) -> dict:
        """Sampling parameters passed to every Gemini call."""
        return {
            "temperature": cls.GEMINI_TEMPERATURE,
            "max_output_tokens": cls.GEMINI_MAX_OUTPUT_TOKENS,
            "top_p": cls.GEMINI_TOP_P,
            "top_k": cls.GEMINI_TOP_K,
        }

    @classmethod
    def validate(cls) -> list[str]:
        """Validate configuration and return list of missing required settings."""
        missing = []

        if cls.INTERVIEWER_TYPE == "gemini" and not cls.GOOGLE_API_KEY:
            missing.append("GOOGLE_API_KEY (required when INTERVIEWER_TYPE=gemini)")

        if cls.is_production() and cls.SESSION_SECRET == DEFAULT_SESSION_SECRET:
            missing.append("SESSION_SECRET (default value must not be used in production)")

        return missing
