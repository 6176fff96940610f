# app/core/config.py
import os


def _bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Runtime configuration read from environment variables.
    Keys for external services are optional: when one is missing the
    dependent feature reports itself disabled instead of failing at import.
    """

    PLACEHOLDER_VALUES = {"", "changeme", "your_api_key_here", "your_google_maps_api_key_here"}

    def __init__(self):
        self.APP_NAME = os.getenv("APP_NAME", "SkillSwitch API")
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./skillswitch.db")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

        # auth
        self.JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))
        self.IDENTITY_PROVIDER_SECRET = os.getenv("IDENTITY_PROVIDER_SECRET", "")

        # generative text API (OpenAI-compatible endpoint)
        self.GENAI_API_KEY = os.getenv("GENAI_API_KEY", "")
        self.GENAI_BASE_URL = os.getenv(
            "GENAI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
        )
        self.GENAI_MODEL = os.getenv("GENAI_MODEL", "gemini-2.0-flash")
        self.GENAI_TIMEOUT_SECONDS = float(os.getenv("GENAI_TIMEOUT_SECONDS", "30"))

        # maps
        self.MAPS_API_KEY = os.getenv("MAPS_API_KEY", "")
        self.DEFAULT_LAT = float(os.getenv("DEFAULT_LAT", "37.7749"))
        self.DEFAULT_LNG = float(os.getenv("DEFAULT_LNG", "-122.4194"))

        # economy
        self.WELCOME_BONUS = int(os.getenv("WELCOME_BONUS", "100"))
        self.DEFAULT_HOURLY_RATE = int(os.getenv("DEFAULT_HOURLY_RATE", "50"))
        self.PLATFORM_FEE_PERCENT = float(os.getenv("PLATFORM_FEE_PERCENT", "12.5"))

        self.ANALYTICS_ENABLED = _bool(os.getenv("ANALYTICS_ENABLED", "true"))

    def is_configured(self, value: str) -> bool:
        return value is not None and value.strip() not in self.PLACEHOLDER_VALUES

    @property
    def genai_enabled(self) -> bool:
        return self.is_configured(self.GENAI_API_KEY)

    @property
    def maps_enabled(self) -> bool:
        return self.is_configured(self.MAPS_API_KEY)

    @property
    def identity_provider_enabled(self) -> bool:
        return self.is_configured(self.IDENTITY_PROVIDER_SECRET)


settings = Settings()
