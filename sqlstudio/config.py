from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database (application tables: users, assignments, attempts)
    database_url: str = "sqlite:///./sqlstudio.db"

    # Where user queries run and sandbox tables live (empty = same as database_url).
    # Point this at a read-only role to harden the sandbox.
    sandbox_database_url: str = ""
    database_echo: bool = False

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:3000"

    # Gemini hint provider: API key, or Vertex AI project (+ optional service account JSON)
    gemini_api_key: str = ""
    vertex_project_id: str = ""
    vertex_location: str = "us-central1"
    vertex_credentials_path: str = ""  # empty = use ADC
    gemini_model: str = "gemini-2.0-flash"

    # Redis (optional cache for hints; empty = no Redis)
    redis_url: str = ""  # e.g. redis://localhost:6379/0
    hint_cache_ttl_seconds: int = 86400

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "text" | "json"

    # Create catalog rows and sandbox tables when the process starts
    seed_on_startup: bool = False

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
