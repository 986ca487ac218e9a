"""Application service for one tracking run over the whole catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from specwatch.domain.errors import PersistFailureError, TrackerError
from specwatch.domain.reconciliation import Failed, NoChange, Update

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from specwatch.domain.model import TrackedEntry
    from specwatch.domain.ports import ArtifactSink, CatalogStore, ChangeSubmitter
    from specwatch.domain.reconciliation import ReconciliationEngine, ReconciliationOutcome

log = getLogger(__name__)

DEFAULT_BRANCH_PREFIX = "spec-updates"


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class PublishOptions:
    """Where and how to open the change request for a run."""

    base_branch: str = "main"
    branch_prefix: str = DEFAULT_BRANCH_PREFIX
    labels: tuple[str, ...] = ()


@dataclass(slots=True)
class TrackingRunResult:
    """Outcome of a tracking run."""

    outcomes: list[ReconciliationOutcome] = field(default_factory=list)
    written_paths: list[str] = field(default_factory=list)
    catalog_saved: bool = False
    catalog_error: str | None = None
    change_url: str | None = None
    change_error: str | None = None

    @property
    def updates(self) -> list[Update]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, Update)]

    @property
    def unchanged(self) -> list[NoChange]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, NoChange)]

    @property
    def failures(self) -> list[Failed]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, Failed)]


def run_tracking(
    *,
    catalog: CatalogStore,
    engine: ReconciliationEngine,
    sink: ArtifactSink,
    submitter: ChangeSubmitter | None = None,
    options: PublishOptions | None = None,
    only: Callable[[TrackedEntry], bool] | None = None,
    dry_run: bool = False,
    clock: Clock = _utcnow,
) -> TrackingRunResult:
    """Reconcile every catalog entry and publish what changed.

    Entries are processed sequentially in catalog order. Only this function
    replaces records in the entry list, and only after the artifact for an
    update has been written. End-of-run failures (catalog save, change
    request) are recorded on the result instead of raised: artifacts already
    on disk stay there and a rerun overwrites them idempotently.
    """

    publish = options or PublishOptions()
    entries = catalog.load()
    result = TrackingRunResult()
    retrieved_at = clock()

    for index, entry in enumerate(entries):
        if only is not None and not only(entry):
            continue
        outcome = engine.reconcile(entry)
        if isinstance(outcome, Update) and not dry_run:
            outcome = _apply_update(outcome, sink=sink, result=result, retrieved_at=retrieved_at)
            if isinstance(outcome, Update):
                entries[index] = outcome.updated_entry
        result.outcomes.append(outcome)

    log.info(
        "Tracking run finished: updated=%s, unchanged=%s, failed=%s%s",
        len(result.updates),
        len(result.unchanged),
        len(result.failures),
        " (dry run)" if dry_run else "",
    )

    if dry_run or not result.updates:
        return result

    try:
        catalog.save(entries)
    except TrackerError as exc:
        log.error("Catalog could not be saved: %s", exc)
        result.catalog_error = str(exc)
    else:
        result.catalog_saved = True
        result.written_paths.append(catalog.location)

    if submitter is not None:
        _submit(result, submitter=submitter, options=publish, timestamp=retrieved_at)

    return result


def _apply_update(
    update: Update,
    *,
    sink: ArtifactSink,
    result: TrackingRunResult,
    retrieved_at: datetime,
) -> Update | Failed:
    try:
        written = sink.write_artifact(update.local_path, update.artifact.content)
    except PersistFailureError as exc:
        log.warning("%s: artifact write failed: %s", update.entry.key, exc)
        return Failed(entry=update.entry, reason=str(exc), kind=exc.kind)
    result.written_paths.append(written)

    try:
        metadata_path = sink.write_metadata(
            update.target_dir, build_metadata(update, retrieved_at=retrieved_at)
        )
    except PersistFailureError as exc:
        log.warning("%s: metadata write failed: %s", update.entry.key, exc)
    else:
        result.written_paths.append(metadata_path)

    return update


def build_metadata(update: Update, *, retrieved_at: datetime) -> dict[str, object]:
    """Describe a published artifact for the ``metadata.json`` beside it."""

    entry = update.updated_entry
    return {
        "vendor": entry.vendor,
        "api": entry.api,
        "name": entry.display_name,
        "version": update.new_version,
        "apiVersion": update.api_version,
        "sourceUrl": update.download_url,
        "contentHash": update.content_hash,
        "updateType": str(update.update_type),
        "retrievedAt": retrieved_at.astimezone(UTC).isoformat(),
        "baseUrl": entry.base_url,
        "docsUrl": entry.docs_url,
        "description": entry.description,
        "tags": list(entry.tags),
    }


def _submit(
    result: TrackingRunResult,
    *,
    submitter: ChangeSubmitter,
    options: PublishOptions,
    timestamp: datetime,
) -> None:
    updates = result.updates
    labels = [*options.labels]
    for update in updates:
        label = f"update:{update.update_type}"
        if label not in labels:
            labels.append(label)

    try:
        result.change_url = submitter.submit_change(
            branch_name=branch_name(options.branch_prefix, timestamp),
            base_branch=options.base_branch,
            title=change_title(updates),
            body=change_body(updates),
            paths=result.written_paths,
            labels=labels,
        )
    except TrackerError as exc:
        log.error("Change request could not be submitted: %s", exc)
        result.change_error = str(exc)
    else:
        log.info("Opened change request %s", result.change_url)


def branch_name(prefix: str, timestamp: datetime) -> str:
    return f"{prefix}/{timestamp.astimezone(UTC).strftime('%Y%m%d-%H%M%S')}"


def change_title(updates: Sequence[Update]) -> str:
    if len(updates) == 1:
        update = updates[0]
        return f"Update {update.entry.display_name} to {update.api_version}"
    return f"Update {len(updates)} API specifications"


def change_body(updates: Sequence[Update]) -> str:
    lines = [
        "Automated update of tracked API specifications.",
        "",
        "| API | Type | Previous | Current | API version | Path |",
        "|---|---|---|---|---|---|",
    ]
    for update in updates:
        lines.append(
            f"| {update.entry.display_name} | {update.update_type} "
            f"| {update.old_version or '-'} | {update.new_version} "
            f"| {update.api_version} | `{update.local_path}` |"
        )
    lines.append("")
    lines.extend(f"- {update.entry.key}: {update.download_url}" for update in updates)
    return "\n".join(lines) + "\n"


__all__ = [
    "Clock",
    "PublishOptions",
    "TrackingRunResult",
    "branch_name",
    "build_metadata",
    "change_body",
    "change_title",
    "run_tracking",
]
