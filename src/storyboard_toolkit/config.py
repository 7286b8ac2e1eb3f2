"""
Synthesis Configuration

Explicit settings passed into the components that talk to the generation
service. Load once with `load_config()` before the first synthesis call;
nothing in the toolkit reads the environment after that.

Sources, lowest to highest precedence:
1. Built-in defaults
2. Environment (`.env` supported): GEMINI_API_KEY / API_KEY,
   STORYBOARD_TEXT_MODEL, STORYBOARD_IMAGE_MODEL
3. A YAML or JSON config file
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_ASPECT_RATIO = "16:9"
MAX_FILE_BYTES = 5 * 1024 * 1024
MIN_OBJECTIVE_CHARS = 10

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


class SynthesisConfig(BaseModel):
    """Settings for one interactive session."""
    api_key: Optional[str] = Field(default=None, repr=False)
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    max_file_bytes: int = Field(default=MAX_FILE_BYTES, gt=0)
    min_objective_chars: int = Field(default=MIN_OBJECTIVE_CHARS, ge=0)

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError."""
        if not self.api_key:
            raise ConfigurationError(
                "API key not found. Set GEMINI_API_KEY in the environment or a .env file."
            )
        return self.api_key


def _read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not parse config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def _from_environment() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for var in API_KEY_ENV_VARS:
        if os.getenv(var):
            values["api_key"] = os.environ[var]
            break
    if os.getenv("STORYBOARD_TEXT_MODEL"):
        values["text_model"] = os.environ["STORYBOARD_TEXT_MODEL"]
    if os.getenv("STORYBOARD_IMAGE_MODEL"):
        values["image_model"] = os.environ["STORYBOARD_IMAGE_MODEL"]
    return values


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    use_dotenv: bool = True,
) -> SynthesisConfig:
    """Build a SynthesisConfig from environment and an optional file.

    A missing API key is not an error here; it surfaces at the first call
    that needs it.
    """
    if use_dotenv:
        env_file = find_dotenv(usecwd=True)
        if env_file:
            load_dotenv(env_file, override=False)

    values = _from_environment()
    if config_path:
        values.update(_read_config_file(Path(config_path)))

    try:
        return SynthesisConfig(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def save_config(config: SynthesisConfig, path: Union[str, Path]) -> None:
    """Save settings (without the API key) to a YAML or JSON file."""
    path = Path(path)
    data = config.model_dump(exclude={"api_key"})
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            yaml.safe_dump(data, f, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
