"""AutoML I/O configuration schemas."""

from .io import (
    GcsDestination,
    GcsSource,
    InputConfig,
    OutputConfig,
    validate_input_config,
    validate_output_config,
)

__all__ = [
    "GcsDestination",
    "GcsSource",
    "InputConfig",
    "OutputConfig",
    "validate_input_config",
    "validate_output_config",
]
