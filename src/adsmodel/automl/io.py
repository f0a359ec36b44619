"""AutoML input and output location configuration."""

from typing import List, Optional

from adsmodel.validation import ValidationResult, check_oneofs, join_path
from adsmodel.wire.message import WireMessage, wire_field

GCS_SCHEME = "gs://"
MAX_URI_LENGTH = 2000


class GcsSource(WireMessage):
    """Cloud Storage URIs of input files, e.g. ``gs://bucket/dir/object.csv``."""

    input_uris: List[str] = wire_field(1, "string", repeated=True)


class GcsDestination(WireMessage):
    """Cloud Storage prefix the output is written under, e.g. ``gs://bucket/dir``."""

    output_uri_prefix: str = wire_field(1, "string")


class InputConfig(WireMessage):
    gcs_source: Optional[GcsSource] = wire_field(
        1, "message", message=GcsSource, oneof="source"
    )


class OutputConfig(WireMessage):
    gcs_destination: Optional[GcsDestination] = wire_field(
        1, "message", message=GcsDestination, oneof="destination"
    )


def _check_uri(uri: str, path: str, result: ValidationResult) -> None:
    if not uri.startswith(GCS_SCHEME) or len(uri) == len(GCS_SCHEME):
        result.add(path, f"'{uri}' is not a gs:// URI", "invalid_gcs_uri")
    if len(uri) > MAX_URI_LENGTH:
        result.add(path, f"longer than {MAX_URI_LENGTH} characters", "gcs_uri_too_long")


def validate_input_config(config: InputConfig) -> ValidationResult:
    result = ValidationResult()
    check_oneofs(config, result)
    source = config.gcs_source
    if source is None:
        result.add("source", "an input source is required", "source_required")
        return result
    if not source.input_uris:
        result.add("gcs_source.input_uris", "at least one URI is required", "uris_required")
    for i, uri in enumerate(source.input_uris):
        _check_uri(uri, join_path("gcs_source", f"input_uris[{i}]"), result)
    return result


def validate_output_config(config: OutputConfig) -> ValidationResult:
    result = ValidationResult()
    check_oneofs(config, result)
    destination = config.gcs_destination
    if destination is None:
        result.add("destination", "an output destination is required", "destination_required")
        return result
    _check_uri(destination.output_uri_prefix, "gcs_destination.output_uri_prefix", result)
    return result
