"""Container build provenance: what was built, from which source, how."""

from datetime import datetime, timezone
from enum import IntEnum
from typing import Dict, List, Optional

from adsmodel.validation import ValidationResult, check_oneofs, join_path
from adsmodel.wire.message import WireMessage, wire_field

SHA256_DIGEST_SIZE = 32
MAX_NANOS = 999_999_999


class Timestamp(WireMessage):
    """A point in time as seconds and nanoseconds since the Unix epoch."""

    seconds: int = wire_field(1, "int64")
    nanos: int = wire_field(2, "int32")

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - datetime(1970, 1, 1, tzinfo=timezone.utc)
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds=seconds, nanos=delta.microseconds * 1000)

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc).replace(
            microsecond=self.nanos // 1000
        )


class HashType(IntEnum):
    NONE = 0
    SHA256 = 1


class Hash(WireMessage):
    type: HashType = wire_field(1, "enum", enum=HashType)
    value: bytes = wire_field(2, "bytes")


class FileHashes(WireMessage):
    file_hash: List[Hash] = wire_field(1, "message", message=Hash, repeated=True)


class StorageSource(WireMessage):
    """An object in Cloud Storage."""

    bucket: str = wire_field(1, "string")
    object: str = wire_field(2, "string")
    generation: int = wire_field(3, "int64")


class RepoSource(WireMessage):
    """A revision in a Cloud Source Repository."""

    project_id: str = wire_field(1, "string")
    repo_name: str = wire_field(2, "string")
    branch_name: Optional[str] = wire_field(3, "string", oneof="revision")
    tag_name: Optional[str] = wire_field(4, "string", oneof="revision")
    commit_sha: Optional[str] = wire_field(5, "string", oneof="revision")


class GitSourceContext(WireMessage):
    url: str = wire_field(1, "string")
    revision_id: str = wire_field(2, "string")


class SourceContext(WireMessage):
    """Where source came from.

    Only the git context is modelled; cloud repo and Gerrit contexts are
    kept as unknown fields and survive a decode/encode cycle unchanged.
    """

    git: Optional[GitSourceContext] = wire_field(
        3, "message", message=GitSourceContext, oneof="context"
    )
    labels: Dict[str, str] = wire_field(4, "map", map_key="string", map_value="string")


class Source(WireMessage):
    """Source a build was started from."""

    storage_source: Optional[StorageSource] = wire_field(
        1, "message", message=StorageSource, oneof="source"
    )
    repo_source: Optional[RepoSource] = wire_field(
        2, "message", message=RepoSource, oneof="source"
    )
    file_hashes: Dict[str, FileHashes] = wire_field(
        3, "map", map_key="string", map_value="message", message=FileHashes
    )
    artifact_storage_source: Optional[StorageSource] = wire_field(
        4, "message", message=StorageSource
    )
    context: Optional[SourceContext] = wire_field(7, "message", message=SourceContext)
    additional_contexts: List[SourceContext] = wire_field(
        8, "message", message=SourceContext, repeated=True
    )


class Command(WireMessage):
    """A step executed during the build."""

    name: str = wire_field(1, "string")
    env: List[str] = wire_field(2, "string", repeated=True)
    args: List[str] = wire_field(3, "string", repeated=True)
    dir: str = wire_field(4, "string")
    id: str = wire_field(5, "string")
    wait_for: List[str] = wire_field(6, "string", repeated=True)


class Artifact(WireMessage):
    """An output of the build."""

    name: str = wire_field(1, "string")
    checksum: str = wire_field(2, "string")
    id: str = wire_field(3, "string")
    names: List[str] = wire_field(4, "string", repeated=True)


class BuildProvenance(WireMessage):
    """Provenance of a build: its commands, outputs, source and timing."""

    id: str = wire_field(1, "string")
    project_id: str = wire_field(2, "string")
    commands: List[Command] = wire_field(5, "message", message=Command, repeated=True)
    built_artifacts: List[Artifact] = wire_field(
        6, "message", message=Artifact, repeated=True
    )
    create_time: Optional[Timestamp] = wire_field(7, "message", message=Timestamp)
    start_time: Optional[Timestamp] = wire_field(8, "message", message=Timestamp)
    finish_time: Optional[Timestamp] = wire_field(9, "message", message=Timestamp)
    creator: str = wire_field(11, "string")
    logs_bucket: str = wire_field(13, "string")
    source_provenance: Optional[Source] = wire_field(14, "message", message=Source)
    trigger_id: str = wire_field(15, "string")
    build_options: Dict[str, str] = wire_field(
        16, "map", map_key="string", map_value="string"
    )
    builder_version: str = wire_field(17, "string")


def _check_timestamp(ts: Optional[Timestamp], path: str, result: ValidationResult) -> None:
    if ts is not None and not 0 <= ts.nanos <= MAX_NANOS:
        result.add(path, f"nanos {ts.nanos} outside 0..{MAX_NANOS}", "invalid_timestamp")


def _sort_key(ts: Timestamp) -> tuple:
    return (ts.seconds, ts.nanos)


def validate_provenance(provenance: BuildProvenance) -> ValidationResult:
    """Check oneofs, hash digests, timestamps and command dependencies."""
    result = ValidationResult()
    check_oneofs(provenance, result)

    for name in ("create_time", "start_time", "finish_time"):
        _check_timestamp(getattr(provenance, name), name, result)
    start, finish = provenance.start_time, provenance.finish_time
    if start is not None and finish is not None and _sort_key(finish) < _sort_key(start):
        result.add("finish_time", "is before start_time", "invalid_time_range")

    command_ids = {c.id for c in provenance.commands if c.id}
    for i, command in enumerate(provenance.commands):
        for dep in command.wait_for:
            if dep not in command_ids:
                result.add(
                    f"commands[{i}].wait_for",
                    f"unknown command id '{dep}'",
                    "unknown_command_dependency",
                )

    source = provenance.source_provenance
    if source is not None:
        for file_name, hashes in source.file_hashes.items():
            for j, digest in enumerate(hashes.file_hash):
                path = join_path("source_provenance", f"file_hashes[{file_name}].file_hash[{j}]")
                if digest.type == HashType.SHA256 and len(digest.value) != SHA256_DIGEST_SIZE:
                    result.add(
                        path,
                        f"SHA256 digest must be {SHA256_DIGEST_SIZE} bytes, "
                        f"got {len(digest.value)}",
                        "invalid_digest",
                    )
    return result
