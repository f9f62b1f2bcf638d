"""
Configuration module for the Image Text Translator service.

Uses Pydantic Settings to load configuration from .env file.
All environment variables are validated and type-checked.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from image_translator.languages import LANGUAGE_CODES


class Config(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Environment variables are automatically loaded from .env file.
    Provider credentials are optional: a provider without its key fails
    on first use and is demoted for the rest of the session.
    """

    # ============ LIBRETRANSLATE ============
    LIBRETRANSLATE_URL: str = Field(
        default="https://libretranslate.de/translate",
        description="LibreTranslate translate endpoint"
    )
    LIBRETRANSLATE_API_KEY: Optional[str] = Field(
        default=None,
        description="LibreTranslate API key (optional, sent only when set)"
    )

    # ============ MYMEMORY ============
    MYMEMORY_URL: str = Field(
        default="https://api.mymemory.translated.net/get",
        description="MyMemory translate endpoint"
    )
    MYMEMORY_SOURCE_LANGUAGE: str = Field(
        default="en",
        description="Source language used in the MyMemory langpair"
    )

    # ============ GOOGLE CLOUD TRANSLATION ============
    GOOGLE_TRANSLATE_URL: str = Field(
        default="https://translation.googleapis.com/language/translate/v2",
        description="Google Cloud Translation v2 endpoint"
    )
    GOOGLE_TRANSLATE_API_KEY: Optional[str] = Field(
        default=None,
        description="Google Cloud Translation API key"
    )

    # ============ MICROSOFT AZURE TRANSLATOR ============
    AZURE_TRANSLATOR_URL: str = Field(
        default="https://api.cognitive.microsofttranslator.com/translate",
        description="Azure Translator endpoint"
    )
    AZURE_TRANSLATOR_KEY: Optional[str] = Field(
        default=None,
        description="Azure Translator subscription key"
    )
    AZURE_TRANSLATOR_REGION: Optional[str] = Field(
        default=None,
        description="Azure Translator subscription region"
    )

    # ============ DEEPL ============
    DEEPL_URL: str = Field(
        default="https://api-free.deepl.com/v2/translate",
        description="DeepL translate endpoint"
    )
    DEEPL_API_KEY: Optional[str] = Field(
        default=None,
        description="DeepL authentication key"
    )

    # ============ TRANSLATION ============
    HTTP_TIMEOUT_SEC: Optional[float] = Field(
        default=None,
        description="Total timeout for provider requests (unset keeps the aiohttp default)"
    )
    HONOR_PREFERRED_PROVIDER: bool = Field(
        default=True,
        description="Start the fallback order at the provider the user selected"
    )
    DEFAULT_TARGET_LANGUAGE: str = Field(
        default="es",
        description="Target language preselected for new sessions"
    )

    # ============ OCR ============
    OCR_LANGUAGES: str = Field(
        default="eng+spa+fra+deu+ita+por+rus+chi_sim+jpn+ara",
        description="Tesseract language hint passed with every recognition"
    )
    OCR_PAGE_SEG_MODE: Optional[int] = Field(
        default=None,
        description="Tesseract page segmentation mode (--psm), e.g. 7 for a single text line"
    )
    OCR_CHAR_WHITELIST: Optional[str] = Field(
        default=None,
        description="Restrict recognized characters (tessedit_char_whitelist)"
    )
    TESSERACT_CMD: Optional[str] = Field(
        default=None,
        description="Path to the tesseract executable if it is not on PATH"
    )
    MAX_IMAGE_SIZE_MB: int = Field(
        default=20,
        description="Maximum uploaded image size in megabytes"
    )

    # ============ SESSIONS ============
    SESSION_TTL_SECONDS: int = Field(
        default=3600,
        description="Idle time after which a browser session is dropped"
    )
    MAX_SESSIONS: int = Field(
        default=1000,
        description="Maximum number of live browser sessions"
    )

    # ============ APPLICATION ============
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    ENVIRONMENT: str = Field(
        default="production",
        description="Environment name (development, staging, production)"
    )
    API_HOST: str = Field(
        default="0.0.0.0",
        description="Interface the web server binds to"
    )
    API_PORT: int = Field(
        default=8000,
        description="Port for the web server"
    )

    # Pydantic settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # ============ VALIDATORS ============

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {allowed_levels}, got {v}"
            )
        return v_upper

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed_envs = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed_envs:
            raise ValueError(
                f"ENVIRONMENT must be one of {allowed_envs}, got {v}"
            )
        return v_lower

    @field_validator("DEFAULT_TARGET_LANGUAGE")
    @classmethod
    def validate_target_language(cls, v: str) -> str:
        """Validate the default target language is a supported code."""
        v_lower = v.lower()
        if v_lower not in LANGUAGE_CODES:
            raise ValueError(
                f"DEFAULT_TARGET_LANGUAGE must be one of {sorted(LANGUAGE_CODES)}, got {v}"
            )
        return v_lower

    @field_validator("MAX_IMAGE_SIZE_MB", "SESSION_TTL_SECONDS", "MAX_SESSIONS")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate limits are positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    # ============ HELPER PROPERTIES ============

    @property
    def max_image_bytes(self) -> int:
        """Maximum accepted image payload in bytes."""
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024

    @property
    def tesseract_config(self) -> str:
        """
        Build the extra Tesseract config string from OCR settings.

        Returns:
            String such as "--psm 7 -c tessedit_char_whitelist=abc",
            or empty string if no options are set.
        """
        parts = []
        if self.OCR_PAGE_SEG_MODE is not None:
            parts.append(f"--psm {self.OCR_PAGE_SEG_MODE}")
        if self.OCR_CHAR_WHITELIST:
            parts.append(f"-c tessedit_char_whitelist={self.OCR_CHAR_WHITELIST}")
        return " ".join(parts)


# ============ SINGLETON INSTANCE ============

# Usage: from image_translator.config import config
config = Config()
