from __future__ import annotations

from specwatch.domain.errors import FailureKind, NotFoundRemoteError
from specwatch.domain.model import ReleaseInfo, UpdateType, VersioningStrategy
from specwatch.domain.reconciliation import (
    Failed,
    NoChange,
    ReconciliationEngine,
    Update,
    fingerprint,
)
from tests.helpers.specs import (
    UNVERSIONED_SPEC,
    YAML_SPEC_V1,
    YAML_SPEC_V1_EDITED,
    YAML_SPEC_V2,
    FakeSpecSource,
    make_entry,
)


def _release_source(tag: str, content: str, **release: object) -> FakeSpecSource:
    return FakeSpecSource(
        release=ReleaseInfo(tag=tag, asset_names=("openapi.yaml",), **release),  # type: ignore[arg-type]
        assets={(tag, "openapi.yaml"): content},
    )


def test_unchanged_tag_and_content_is_no_change() -> None:
    entry = make_entry(
        VersioningStrategy.RELEASE_TAG,
        last_version="v1.0.0",
        last_content_hash=fingerprint(YAML_SPEC_V1),
    )
    engine = ReconciliationEngine(source=_release_source("v1.0.0", YAML_SPEC_V1))

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, NoChange)
    assert outcome.entry is entry


def test_tag_change_only_is_version_update() -> None:
    entry = make_entry(
        VersioningStrategy.RELEASE_TAG,
        last_version="v1.0.0",
        last_content_hash=fingerprint(YAML_SPEC_V1),
    )
    engine = ReconciliationEngine(source=_release_source("v1.0.1", YAML_SPEC_V1))

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, Update)
    assert outcome.update_type is UpdateType.VERSION
    assert outcome.content_changed is False
    assert outcome.old_version == "v1.0.0"
    assert outcome.new_version == "v1.0.1"
    assert outcome.api_version == "1.0.0"
    assert outcome.target_dir == "acme/widgets/1.0.0"
    assert outcome.local_path == "acme/widgets/1.0.0/openapi.yaml"
    assert outcome.download_url.endswith("/releases/download/v1.0.1/openapi.yaml")


def test_content_change_only_is_content_update() -> None:
    entry = make_entry(
        VersioningStrategy.RELEASE_TAG,
        last_version="v1.0.0",
        last_content_hash=fingerprint(YAML_SPEC_V1),
    )
    engine = ReconciliationEngine(source=_release_source("v1.0.0", YAML_SPEC_V1_EDITED))

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, Update)
    assert outcome.update_type is UpdateType.CONTENT
    assert outcome.content_changed is True
    assert outcome.updated_entry.last_content_hash == fingerprint(YAML_SPEC_V1_EDITED)


def test_tag_and_content_change_is_both() -> None:
    entry = make_entry(
        VersioningStrategy.RELEASE_TAG,
        last_version="v1.0.0",
        last_content_hash=fingerprint(YAML_SPEC_V1),
    )
    engine = ReconciliationEngine(source=_release_source("v2.0.0", YAML_SPEC_V2))

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, Update)
    assert outcome.update_type is UpdateType.BOTH
    assert outcome.api_version == "2.0.0"
    assert outcome.updated_entry.last_version == "v2.0.0"


def test_first_observation_is_an_update() -> None:
    entry = make_entry(VersioningStrategy.RELEASE_TAG)
    engine = ReconciliationEngine(source=_release_source("v1.0.0", YAML_SPEC_V1))

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, Update)
    assert outcome.update_type is UpdateType.BOTH
    assert outcome.old_version == ""


def test_draft_or_prerelease_is_skipped_without_fetching() -> None:
    entry = make_entry(VersioningStrategy.RELEASE_TAG, last_version="v1.0.0")

    for flags in ({"is_draft": True}, {"is_prerelease": True}):
        source = _release_source("v2.0.0-rc.1", YAML_SPEC_V2, **flags)
        outcome = ReconciliationEngine(source=source).reconcile(entry)

        assert isinstance(outcome, NoChange)
        assert outcome.reason is not None
        assert source.called("fetch_release_asset") == []
        assert source.called("fetch_file") == []


def test_missing_asset_falls_back_to_spec_path_at_tag() -> None:
    entry = make_entry(
        VersioningStrategy.RELEASE_TAG,
        release_asset_name="bundle.yaml",
        spec_path="spec/openapi.yaml",
    )
    source = FakeSpecSource(
        release=ReleaseInfo(tag="v3.0.0", asset_names=("other.zip",)),
        files={("v3.0.0", "spec/openapi.yaml"): YAML_SPEC_V2},
    )

    outcome = ReconciliationEngine(source=source).reconcile(entry)

    assert isinstance(outcome, Update)
    assert source.called("fetch_release_asset") == []
    assert source.called("fetch_file") == [("fetch_file", "v3.0.0", "spec/openapi.yaml")]
    assert outcome.download_url == (
        "https://raw.githubusercontent.com/acme/widgets-spec/v3.0.0/spec/openapi.yaml"
    )


def test_api_version_falls_back_to_tag_without_leading_v() -> None:
    entry = make_entry(VersioningStrategy.RELEASE_TAG)
    engine = ReconciliationEngine(source=_release_source("v4.2.0", UNVERSIONED_SPEC))

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, Update)
    assert outcome.api_version == "4.2.0"
    assert outcome.target_dir == "acme/widgets/4.2.0"


def test_tag_without_v_prefix_is_used_verbatim() -> None:
    entry = make_entry(VersioningStrategy.RELEASE_TAG)
    engine = ReconciliationEngine(source=_release_source("2024.06", UNVERSIONED_SPEC))

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, Update)
    assert outcome.api_version == "2024.06"


def test_missing_release_fails_without_touching_entry() -> None:
    entry = make_entry(VersioningStrategy.RELEASE_TAG, last_version="v1.0.0")
    engine = ReconciliationEngine(source=FakeSpecSource())

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, Failed)
    assert outcome.kind is FailureKind.NOT_FOUND_REMOTE
    assert outcome.entry is entry
    assert entry.last_version == "v1.0.0"


def test_asset_fetch_failure_is_reported() -> None:
    entry = make_entry(VersioningStrategy.RELEASE_TAG)
    source = _release_source("v1.0.0", YAML_SPEC_V1)
    source.errors["fetch_release_asset"] = NotFoundRemoteError("gone")

    outcome = ReconciliationEngine(source=source).reconcile(entry)

    assert isinstance(outcome, Failed)
    assert "gone" in outcome.reason


def test_bare_v_tag_keeps_a_nonempty_version_directory() -> None:
    entry = make_entry(VersioningStrategy.RELEASE_TAG)
    engine = ReconciliationEngine(source=_release_source("v", UNVERSIONED_SPEC))

    outcome = engine.reconcile(entry)

    assert isinstance(outcome, Update)
    assert outcome.api_version == "v"
    assert outcome.target_dir == "acme/widgets/v"
