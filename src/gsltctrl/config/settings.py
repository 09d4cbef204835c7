import pathlib
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gsltctrl.exceptions import ConfigurationError

# Same lookup order as the process would use when started from a checkout:
# project root first, then the current working directory.
project_root = pathlib.Path(__file__).parent.parent.parent.parent
env_paths = [
    project_root / ".env",
    pathlib.Path.cwd() / ".env",
]

DEFAULT_BASE_URL = "https://api.steampowered.com/IGameServersService"


class Settings(BaseSettings):
    # Steam Web API key, read from GSLTCTRL_TOKEN
    token: str = Field(..., min_length=1, repr=False)

    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="GSLTCTRL_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("token")
    @classmethod
    def token_must_be_text(cls, value: str) -> str:
        # Undecodable environment bytes come through as lone surrogates.
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("token is not a valid unicode string") from None
        return value


def load_env_file() -> Optional[pathlib.Path]:
    """Load the first .env file found; real environment variables win."""
    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            return env_path
    return None


def load_settings(**overrides) -> Settings:
    """Build the settings, turning validation problems into a ConfigurationError.

    The error message lists the offending fields but never their values, so a
    malformed key does not end up on the terminal.
    """
    load_env_file()
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = ", ".join(
            "GSLTCTRL_" + str(err["loc"][0]).upper() if err["loc"] else "settings"
            for err in e.errors()
        )
        hint = ""
        if "GSLTCTRL_TOKEN" in fields:
            hint = " Set the GSLTCTRL_TOKEN environment variable to your Steam Web API key."
        raise ConfigurationError(
            f"Could not find a valid configuration value for {fields}.{hint}"
        ) from None
