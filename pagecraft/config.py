from pathlib import Path
from typing import Annotated, Literal

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load env values for components that read os.environ directly (e.g., the OpenAI client).
_project_root = Path(__file__).resolve().parents[1]
load_dotenv(_project_root / ".env", override=False)


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    DATABASE_URL: str = "sqlite:///./pagecraft.db"
    BACKEND_CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:5173"]

    # Which persistence collaborator backs the template editor.
    TEMPLATE_STORE: Literal["sql", "rest"] = "sql"
    TEMPLATE_REST_URL: str | None = None
    TEMPLATE_REST_API_KEY: str | None = None
    TEMPLATE_REST_TABLE: str = "landing_page_templates"
    TEMPLATE_REST_TIMEOUT_SECONDS: float = 20.0

    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None
    LLM_DEFAULT_MODEL: str = "gpt-4.1-mini"
    LLM_REQUEST_TIMEOUT: int = 120
    LLM_REQUEST_RETRIES: int = 2
    PAGE_GENERATION_TEMPERATURE: float = 0.7
    PAGE_GENERATION_MAX_SECTIONS: int = 12

    LANGFUSE_ENABLED: bool = False
    LANGFUSE_REQUIRED: bool = False
    LANGFUSE_PUBLIC_KEY: str | None = None
    LANGFUSE_SECRET_KEY: str | None = None
    LANGFUSE_HOST: str = "https://cloud.langfuse.com"
    LANGFUSE_BASE_URL: str | None = None
    LANGFUSE_ENVIRONMENT: str | None = None
    LANGFUSE_RELEASE: str | None = None
    LANGFUSE_SAMPLE_RATE: float = 1.0
    LANGFUSE_DEBUG: bool = False
    LANGFUSE_AUTH_CHECK: bool = True
    LANGFUSE_TIMEOUT_SECONDS: int = 20

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("TEMPLATE_REST_URL")
    @classmethod
    def strip_rest_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in {"prod", "production"}

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
