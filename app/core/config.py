from functools import lru_cache
from pathlib import Path
from typing import List, Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

DEFAULT_CATALOG_PATH = str(Path(__file__).resolve().parent.parent / "data" / "products.json")

# Vite and the static preview server
LOCAL_DEV_ORIGINS = ["http://localhost:5173", "http://localhost:8080"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "CompressionStorefront"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Mongo
    MONGO_URI: str # ✅ declared
    MONGO_DB: str # ✅ declared
    MONGO_TLS: bool = True                     # Atlas needs TLS; local dev usually does not

    # Redis (optional: empty disables the similarity edge cache)
    REDIS_URL: str = ""

    # Catalog
    CATALOG_PATH: str = DEFAULT_CATALOG_PATH

    # Recommendations
    similarity_cache_ttl: int = 15 * 60        # 15 minutes
    similarity_timeout_s: float = 2.0          # seconds; a timeout routes to the fallback scorer
    recommendation_limit_default: int = 4
    recommendation_limit_max: int = 20

    # Background side effects (view/click/telemetry logging)
    background_drain_timeout_s: float = 5.0

    # Session identity
    session_cookie_max_age: int = 365 * 24 * 3600

    # CORS: CSV of storefront origins, e.g. "https://tienda.example.com,https://www.tienda.example.com"
    ALLOWED_ORIGINS: str = ""

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        return origins or list(LOCAL_DEV_ORIGINS)

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
