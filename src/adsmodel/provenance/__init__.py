"""Container build provenance schemas."""

from .models import (
    Artifact,
    BuildProvenance,
    Command,
    FileHashes,
    GitSourceContext,
    Hash,
    HashType,
    RepoSource,
    Source,
    SourceContext,
    StorageSource,
    Timestamp,
    validate_provenance,
)

__all__ = [
    "Artifact",
    "BuildProvenance",
    "Command",
    "FileHashes",
    "GitSourceContext",
    "Hash",
    "HashType",
    "RepoSource",
    "Source",
    "SourceContext",
    "StorageSource",
    "Timestamp",
    "validate_provenance",
]
