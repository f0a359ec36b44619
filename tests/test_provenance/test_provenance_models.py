"""Tests for build provenance schemas."""

from datetime import datetime, timezone

import pytest

from adsmodel.provenance.models import (
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


@pytest.fixture
def provenance():
    return BuildProvenance(
        id="build-1",
        project_id="proj",
        commands=[
            Command(name="gcr.io/cloud-builders/docker", args=["build", "."], id="build"),
            Command(name="gcr.io/cloud-builders/docker", args=["push"], wait_for=["build"]),
        ],
        built_artifacts=[Artifact(name="gcr.io/proj/app", checksum="sha256:abc")],
        start_time=Timestamp(seconds=100, nanos=5),
        finish_time=Timestamp(seconds=200),
        source_provenance=Source(
            repo_source=RepoSource(project_id="proj", repo_name="app", commit_sha="deadbeef"),
            file_hashes={
                "main.py": FileHashes(file_hash=[Hash(type=HashType.SHA256, value=b"\x01" * 32)])
            },
            context=SourceContext(
                git=GitSourceContext(url="https://example.com/app.git", revision_id="deadbeef"),
                labels={"team": "ads"},
            ),
        ),
        build_options={"machine": "e2"},
    )


class TestTimestamp:
    def test_from_datetime(self):
        ts = Timestamp.from_datetime(datetime(1970, 1, 1, 0, 1, 0, 500, tzinfo=timezone.utc))
        assert ts == Timestamp(seconds=60, nanos=500_000)

    def test_naive_is_utc(self):
        assert Timestamp.from_datetime(datetime(1970, 1, 2)).seconds == 86400

    def test_to_datetime(self):
        dt = Timestamp(seconds=86400, nanos=1_000).to_datetime()
        assert dt == datetime(1970, 1, 2, 0, 0, 0, 1, tzinfo=timezone.utc)


class TestProvenance:
    def test_valid(self, provenance):
        assert validate_provenance(provenance).is_valid

    def test_round_trip(self, provenance):
        assert BuildProvenance.decode(provenance.encode()) == provenance

    def test_text_round_trip(self, provenance):
        text = provenance.to_dict()
        hashes = text["source_provenance"]["file_hashes"]["main.py"]["file_hash"]
        assert hashes[0]["type"] == "SHA256"
        assert BuildProvenance.from_dict(text) == provenance

    def test_finish_before_start(self, provenance):
        provenance.finish_time = Timestamp(seconds=100, nanos=4)
        assert validate_provenance(provenance).codes == ["invalid_time_range"]

    def test_bad_nanos(self, provenance):
        provenance.start_time = Timestamp(seconds=1, nanos=1_000_000_000)
        assert validate_provenance(provenance).codes == ["invalid_timestamp"]

    def test_unknown_dependency(self, provenance):
        provenance.commands[1].wait_for = ["missing"]
        result = validate_provenance(provenance)
        assert result.codes == ["unknown_command_dependency"]
        assert result.errors[0].field_path == "commands[1].wait_for"

    def test_short_digest(self, provenance):
        provenance.source_provenance.file_hashes["main.py"].file_hash[0].value = b"\x01"
        result = validate_provenance(provenance)
        assert result.codes == ["invalid_digest"]
        assert result.errors[0].field_path == (
            "source_provenance.file_hashes[main.py].file_hash[0]"
        )

    def test_source_conflict(self, provenance):
        source = Source(
            storage_source=StorageSource(bucket="b", object="o"),
            repo_source=RepoSource(repo_name="r"),
        )
        provenance.source_provenance = source
        result = validate_provenance(provenance)
        assert result.codes == ["oneof_conflict"]
        assert result.errors[0].field_path == "source_provenance.source"

    def test_nested_revision_conflict(self, provenance):
        provenance.source_provenance.repo_source = RepoSource(branch_name="main", tag_name="v1")
        result = validate_provenance(provenance)
        assert result.errors[0].field_path == "source_provenance.repo_source.revision"

    def test_revision_assignment_is_exclusive(self):
        repo = RepoSource(branch_name="main")
        repo.commit_sha = "abc"
        assert repo.which_oneof("revision") == "commit_sha"
        assert repo.branch_name is None


class TestSourceContext:
    def test_other_context_kinds_survive(self):
        # cloud_repo context (1) is not modelled
        data = b"\x0a\x02\x0a\x00" + b"\x22\x06\x0a\x01k\x12\x01v"
        context = SourceContext.decode(data)
        assert context.labels == {"k": "v"}
        assert context.git is None
        assert context.encode() == b"\x22\x06\x0a\x01k\x12\x01v\x0a\x02\x0a\x00"
