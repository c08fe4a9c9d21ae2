import os
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

_FIREWORKS_CHAT_URL = "https://api.fireworks.ai/inference/v1/chat/completions"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Reflect Analysis Service"
    ENV: str = os.getenv("ENV", "development")

    # Remote language model. An empty key switches the pipeline to local-only mode.
    LLM_API_KEY: str = os.getenv("LLM_API_KEY", os.getenv("FIREWORKS_API_KEY", ""))
    LLM_API_URL: str = os.getenv("LLM_API_URL", _FIREWORKS_CHAT_URL)
    LLM_MODEL: str = os.getenv("LLM_MODEL", "accounts/fireworks/models/llama-v3p1-8b-instruct")

    LLM_ANALYSIS_TIMEOUT: float = float(os.getenv("LLM_ANALYSIS_TIMEOUT", "30"))
    LLM_ANALYSIS_TEMPERATURE: float = 0.3
    LLM_ANALYSIS_MAX_TOKENS: int = 1500

    LLM_REFRAME_TIMEOUT: float = float(os.getenv("LLM_REFRAME_TIMEOUT", "15"))
    LLM_REFRAME_TEMPERATURE: float = 0.3
    LLM_REFRAME_MAX_TOKENS: int = 200

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    @property
    def ai_configured(self) -> bool:
        return bool(self.LLM_API_KEY.strip())


settings = Settings()
