from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	gemini_timeout_seconds: float = Field(default=60.0, validation_alias="GEMINI_TIMEOUT_SECONDS")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")

	# Sampling temperatures for fresh scripts and for refinements of an existing one
	generation_temperature: float = Field(default=0.7, validation_alias="GENERATION_TEMPERATURE")
	refinement_temperature: float = Field(default=0.5, validation_alias="REFINEMENT_TEMPERATURE")

	# OpenRouter fallback configuration (optional; used by text-only calls such as chat)
	openrouter_api_key: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")
	openrouter_model: str = Field(default="x-ai/grok-4-fast:free", validation_alias="OPENROUTER_MODEL")
	openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1/chat/completions", validation_alias="OPENROUTER_BASE_URL")
	openrouter_referer: str = Field(default="https://localhost", validation_alias="OPENROUTER_HTTP_REFERER")
	openrouter_title: str = Field(default="PromptForm AI", validation_alias="OPENROUTER_TITLE")

	# Product image uploads
	max_attachment_bytes: int = Field(default=8 * 1024 * 1024, validation_alias="MAX_ATTACHMENT_BYTES")
	max_attachments: int = Field(default=10, validation_alias="MAX_ATTACHMENTS")

	# Chat assistant; least recently used sessions are dropped beyond this many
	chat_max_sessions: int = Field(default=200, validation_alias="CHAT_MAX_SESSIONS")

	# Logging
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	log_json: bool = Field(default=False, validation_alias="LOG_JSON")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
