from pydantic import Field
from pydantic_settings import BaseSettings

from recruit_ai.core.errors import ConfigurationError


class AzureOpenAISettings(BaseSettings):
    endpoint: str = ""
    api_key: str = ""
    deployment_name: str = "gpt-4"
    api_version: str = "2024-02-15-preview"

    model_config = {"env_prefix": "AZURE_OPENAI_", "frozen": True}

    def require(self) -> None:
        """Fail fast if the completion service cannot be reached.

        Checked in a fixed order so the error always names the first gap.
        """
        for name in ("endpoint", "api_key", "deployment_name"):
            if not getattr(self, name):
                env_var = f"{self.model_config['env_prefix']}{name.upper()}"
                raise ConfigurationError(f"{env_var} environment variable is required")


class SearchSettings(BaseSettings):
    endpoint: str = ""
    api_key: str = ""
    index_name: str = "candidates-index"

    model_config = {"env_prefix": "AZURE_SEARCH_", "frozen": True}


class StorageSettings(BaseSettings):
    connection_string: str = ""
    container_name: str = "resumes"

    model_config = {"env_prefix": "AZURE_STORAGE_", "frozen": True}


class SqlSettings(BaseSettings):
    connection_string: str = ""

    model_config = {"env_prefix": "AZURE_SQL_", "frozen": True}


class SendGridSettings(BaseSettings):
    api_key: str = ""

    model_config = {"env_prefix": "SENDGRID_", "frozen": True}


class Settings(BaseSettings):
    openai: AzureOpenAISettings = Field(default_factory=AzureOpenAISettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    sql: SqlSettings = Field(default_factory=SqlSettings)
    sendgrid: SendGridSettings = Field(default_factory=SendGridSettings)

    model_config = {"env_prefix": "RECRUIT_AI_", "frozen": True}


def load_settings() -> Settings:
    """Load settings once at startup and validate the completion section."""
    loaded = Settings()
    loaded.openai.require()
    return loaded


settings = Settings()
