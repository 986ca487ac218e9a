"""Application orchestration entry points."""

from __future__ import annotations

from functools import lru_cache
from logging import getLogger
from typing import TYPE_CHECKING

from specwatch.adapters.catalog import JsonCatalogStore
from specwatch.adapters.filesystem import LocalArtifactSink
from specwatch.adapters.github import GitHubChangeSubmitter, GitHubClient, GitHubSpecSource
from specwatch.config import (
    get_github_config,
    get_publish_config,
    get_storage_config,
    get_tracking_config,
)
from specwatch.domain.reconciliation import ReconciliationEngine
from specwatch.domain.tracking import PublishOptions, TrackingRunResult, run_tracking

if TYPE_CHECKING:
    from collections.abc import Sequence

    from specwatch.config import PublishConfig, StorageConfig, TrackingConfig
    from specwatch.domain.model import TrackedEntry
    from specwatch.domain.ports import ArtifactSink, CatalogStore, ChangeSubmitter, SpecSource


log = getLogger(__name__)


@lru_cache(maxsize=1)
def _get_default_client() -> GitHubClient:
    return GitHubClient(config=get_github_config())


def build_change_submitter(
    publish: PublishConfig, storage: StorageConfig | None = None
) -> GitHubChangeSubmitter:
    """Create a submitter that authenticates with the publish token."""

    storage_config = storage or get_storage_config()
    return GitHubChangeSubmitter(
        client=GitHubClient(config=get_github_config(token=publish.token)),
        owner=publish.owner,
        repo=publish.repo,
        workspace_dir=storage_config.resolve_workspace_dir(),
    )


def build_catalog_store(storage: StorageConfig | None = None) -> JsonCatalogStore:
    storage_config = storage or get_storage_config()
    return JsonCatalogStore(
        path=storage_config.catalog_path(),
        workspace_dir=storage_config.resolve_workspace_dir(),
    )


def list_catalog(*, catalog: CatalogStore | None = None) -> list[TrackedEntry]:
    """Return the tracked entries in catalog order."""

    return (catalog or build_catalog_store()).load()


def track_specs(
    *,
    source: SpecSource | None = None,
    catalog: CatalogStore | None = None,
    sink: ArtifactSink | None = None,
    submitter: ChangeSubmitter | None = None,
    tracking: TrackingConfig | None = None,
    open_pull_request: bool = True,
    only: Sequence[str] | None = None,
    dry_run: bool = False,
) -> TrackingRunResult:
    """Run the tracker using the configured adapters."""

    storage = get_storage_config()
    tracking_config = tracking or get_tracking_config()

    effective_source = source or GitHubSpecSource(client=_get_default_client())
    effective_catalog = catalog or build_catalog_store(storage)
    effective_sink = sink or LocalArtifactSink(
        workspace_dir=storage.resolve_workspace_dir(),
        specs_dirname=storage.specs_dirname,
    )

    base_branch = tracking_config.default_branch
    effective_submitter = submitter if open_pull_request else None
    if effective_submitter is None and open_pull_request and not dry_run:
        publish = get_publish_config()
        base_branch = publish.base_branch
        effective_submitter = build_change_submitter(publish, storage)

    selected = set(only or ())
    log.info(
        "Starting tracking run: catalog=%s, dry_run=%s, pull_request=%s, only=%s",
        effective_catalog.location,
        dry_run,
        effective_submitter is not None,
        sorted(selected) or "all",
    )

    result = run_tracking(
        catalog=effective_catalog,
        engine=ReconciliationEngine(
            source=effective_source,
            default_branch=tracking_config.default_branch,
        ),
        sink=effective_sink,
        submitter=effective_submitter,
        options=PublishOptions(
            base_branch=base_branch,
            branch_prefix=tracking_config.branch_prefix,
            labels=tracking_config.labels,
        ),
        only=(lambda entry: entry.key in selected) if selected else None,
        dry_run=dry_run,
    )

    for failure in result.failures:
        log.warning("%s failed (%s): %s", failure.entry.key, failure.kind, failure.reason)
    return result
