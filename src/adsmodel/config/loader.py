"""YAML configuration and document loading with Pydantic validation."""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, TypeVar

if TYPE_CHECKING:
    from adsmodel.campaign.models import Campaign
    from adsmodel.wire.message import WireMessage

import yaml
from pydantic import BaseModel, ValidationError

from .models import AdsModelConfig

T = TypeVar("T", bound=BaseModel)
W = TypeVar("W", bound="WireMessage")


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(f"Expected a mapping at the top of {path}")
            return data
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: Path, model_class: type[T]) -> T:
    """Load and validate a YAML file against a Pydantic model.

    Args:
        path: Path to the YAML file.
        model_class: Pydantic model class to validate against.

    Returns:
        Validated model instance.

    Raises:
        ConfigError: If validation fails.
    """
    data = load_yaml(path)
    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Validation failed for {path}: {e}") from e


def load_settings(path: Optional[Path] = None) -> AdsModelConfig:
    """Load adsmodel settings, or the defaults when no file is given."""
    if path is None:
        return AdsModelConfig()
    return load_config(path, AdsModelConfig)


def load_message(path: Path, message_class: type[W]) -> W:
    """Load a message document written in the text form.

    Raises:
        ConfigError: If the file is unreadable or does not fit the schema.
    """
    from adsmodel.wire.codec import DecodeError

    data = load_yaml(path)
    try:
        return message_class.from_dict(data)
    except DecodeError as e:
        raise ConfigError(f"Validation failed for {path}: {e}") from e


def load_campaign(path: Path) -> "Campaign":
    """Load a campaign document written in the text form."""
    from adsmodel.campaign.models import Campaign

    return load_message(path, Campaign)


def dump_yaml(data: dict) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
