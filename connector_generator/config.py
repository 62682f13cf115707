"""Generator configuration using Pydantic Settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Generator settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATALYST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App settings
    app_name: str = "Catalyst Connector Generator"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # Output
    output_dir: str = "connectors/generated"

    # ==========================================================================
    # RUNTIME CONVENTIONS
    # These values are baked into every generated document and must match
    # the deployed bridge and n8n instance.
    # ==========================================================================

    # n8n webhook base (the Camunda bridge calls <base>/<webhook path>)
    n8n_webhook_base_url: str = "http://catalyst-n8n:5678/webhook"
    webhook_path_prefix: str = "catalyst"

    # Element template identity
    template_namespace: str = "io.catalyst.template"
    element_template_schema_url: str = (
        "https://unpkg.com/@camunda/element-templates-json-schema/resources/schema.json"
    )

    # Java delegate that executes generated service tasks
    bridge_class: str = "io.catalyst.bridge.CatalystBridge"

    # Defaults written into generated forms
    default_timeout_seconds: int = 30

    # Multi-operation generation
    default_max_tier: int = 2


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
