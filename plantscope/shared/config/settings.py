# 📄 File: plantscope/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads every setting from environment variables
# (API keys, provider addresses, image search rules) and hands them to the rest of the app.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for provider endpoints, per-call deadlines,
# image aggregation tunables and relevance keyword lists.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading (used by pydantic-settings)
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - plantscope.main (application startup)
# - plantscope.modules.plant_lookup.infrastructure.external (provider clients)
# - plantscope.modules.plant_lookup.presentation.dependencies (aggregator wiring)

from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every provider key is optional: a provider without a key is reported as
    a configuration failure for that provider only, the rest of the
    aggregation keeps working.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="PlantScope API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Plant and plant-disease identification backed by botanical data providers",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format: json or text")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=True, description="Auto-reload on changes")
    WORKERS: int = Field(default=1, description="Number of worker processes")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="CORS allow credentials")

    # =========================================================================
    # PROVIDER CALL POLICY
    # =========================================================================

    PROVIDER_TIMEOUT_SECONDS: float = Field(
        default=15.0,
        description="Deadline applied to every single provider call"
    )
    MAX_IMAGE_SIZE: int = Field(default=5242880, description="Max upload size (5MB)")

    # =========================================================================
    # PLANT IDENTIFICATION API
    # =========================================================================

    PLANT_ID_API_KEY: Optional[str] = Field(None, description="Plant.id API key")
    PLANT_ID_API_URL: str = Field(
        default="https://api.plant.id/v2/identify",
        description="Plant.id identification endpoint"
    )

    # =========================================================================
    # GENERATIVE TEXT APIs
    # =========================================================================

    GEMINI_API_KEY: Optional[str] = Field(None, description="Google Gemini API key")
    GEMINI_API_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1",
        description="Gemini API base URL"
    )
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash", description="Gemini model")

    PERPLEXITY_API_KEY: Optional[str] = Field(None, description="Perplexity API key")
    PERPLEXITY_API_URL: str = Field(
        default="https://api.perplexity.ai",
        description="Perplexity API base URL"
    )
    PERPLEXITY_MODEL: str = Field(default="sonar", description="Perplexity model")

    # =========================================================================
    # TAXONOMY, MEDIA AND WEATHER APIs
    # =========================================================================

    GBIF_API_URL: str = Field(default="https://api.gbif.org/v1", description="GBIF API URL")

    WIKIMEDIA_API_URL: str = Field(
        default="https://commons.wikimedia.org/w/api.php",
        description="Wikimedia Commons API endpoint"
    )

    UNSPLASH_ACCESS_KEY: Optional[str] = Field(None, description="Unsplash access key")
    UNSPLASH_API_URL: str = Field(
        default="https://api.unsplash.com",
        description="Unsplash API URL"
    )

    OPENWEATHER_API_KEY: Optional[str] = Field(None, description="OpenWeather API key")
    OPENWEATHER_API_URL: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="OpenWeather API URL"
    )

    # =========================================================================
    # IMAGE AGGREGATION
    # =========================================================================

    IMAGE_TARGET_COUNT: int = Field(default=4, description="Images returned per subject")
    IMAGE_PRIMARY_CAP: int = Field(default=4, description="Max images taken from Wikimedia")
    IMAGE_SUFFICIENT_COUNT: int = Field(
        default=3,
        description="Primary images needed to skip the secondary provider"
    )
    IMAGE_SECONDARY_CAP: int = Field(default=2, description="Max images taken from Unsplash")

    PLANT_IMAGE_ALLOW_TERMS: List[str] = Field(
        default=[
            "plant", "flower", "leaf", "leaves", "tree", "shrub", "botanical",
            "botany", "garden", "bloom", "blossom", "petal", "foliage", "herb",
        ],
        description="Secondary image must mention one of these (plants)"
    )
    PLANT_IMAGE_DENY_TERMS: List[str] = Field(
        default=[
            "person", "people", "human", "man", "woman", "child", "building",
            "city", "car", "food", "pet", "dog", "cat",
        ],
        description="Secondary image must mention none of these (plants)"
    )
    DISEASE_IMAGE_ALLOW_TERMS: List[str] = Field(
        default=[
            "disease", "pathology", "infection", "symptoms", "symptom", "plant",
            "leaf", "fungal", "bacterial", "blight", "rot", "spot", "virus",
        ],
        description="Secondary image must mention one of these (diseases)"
    )
    DISEASE_IMAGE_DENY_TERMS: List[str] = Field(
        default=[
            "person", "people", "human", "man", "woman", "child", "building",
            "city", "car", "food", "healthy", "beautiful", "green", "fresh",
        ],
        description="Secondary image must mention none of these (diseases)"
    )

    COMMON_DISEASES: List[str] = Field(
        default=[
            "Powdery Mildew", "Black Spot", "Rust", "Blight", "Root Rot", "Leaf Spot",
            "Anthracnose", "Fusarium Wilt", "Verticillium Wilt", "Downy Mildew",
            "Fire Blight", "Canker", "Mosaic Virus", "Crown Rot", "Bacterial Wilt",
        ],
        description="Disease names offered by /diseases/suggest"
    )

    # =========================================================================
    # NORMALIZATION
    # =========================================================================

    PLACEHOLDER_VALUES: List[str] = Field(
        default=["information not available", "not available", "unknown", "n/a"],
        description="Upstream filler strings treated as absent values"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    @field_validator("PROVIDER_TIMEOUT_SECONDS")
    @classmethod
    def validate_provider_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Provider timeout must be positive")
        return v

    @field_validator(
        "PLANT_IMAGE_ALLOW_TERMS",
        "PLANT_IMAGE_DENY_TERMS",
        "DISEASE_IMAGE_ALLOW_TERMS",
        "DISEASE_IMAGE_DENY_TERMS",
        "PLACEHOLDER_VALUES",
    )
    @classmethod
    def lowercase_terms(cls, v: List[str]) -> List[str]:
        """Keyword lists are matched against lowercased text."""
        return [term.strip().lower() for term in v if term and term.strip()]

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "test"

    # =========================================================================
    # API PROVIDER CONFIGURATIONS
    # =========================================================================

    def get_provider_config(self) -> Dict[str, Dict[str, Any]]:
        """Get provider configuration keyed by provider name."""
        return {
            "plant_id": {
                "api_key": self.PLANT_ID_API_KEY,
                "api_url": self.PLANT_ID_API_URL,
                "requires_key": True,
            },
            "gemini": {
                "api_key": self.GEMINI_API_KEY,
                "api_url": self.GEMINI_API_URL,
                "model": self.GEMINI_MODEL,
                "requires_key": True,
            },
            "perplexity": {
                "api_key": self.PERPLEXITY_API_KEY,
                "api_url": self.PERPLEXITY_API_URL,
                "model": self.PERPLEXITY_MODEL,
                "requires_key": True,
            },
            "gbif": {
                "api_key": None,
                "api_url": self.GBIF_API_URL,
                "requires_key": False,
            },
            "wikimedia": {
                "api_key": None,
                "api_url": self.WIKIMEDIA_API_URL,
                "requires_key": False,
            },
            "unsplash": {
                "api_key": self.UNSPLASH_ACCESS_KEY,
                "api_url": self.UNSPLASH_API_URL,
                "requires_key": True,
            },
            "openweather": {
                "api_key": self.OPENWEATHER_API_KEY,
                "api_url": self.OPENWEATHER_API_URL,
                "requires_key": True,
            },
        }

    def get_image_relevance_terms(self, kind: str) -> Dict[str, List[str]]:
        """Get allow/deny keyword lists for a subject kind ("plant" or "disease")."""
        if kind == "disease":
            return {
                "allow": list(self.DISEASE_IMAGE_ALLOW_TERMS),
                "deny": list(self.DISEASE_IMAGE_DENY_TERMS),
            }
        return {
            "allow": list(self.PLANT_IMAGE_ALLOW_TERMS),
            "deny": list(self.PLANT_IMAGE_DENY_TERMS),
        }


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
