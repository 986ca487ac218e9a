"""Per-entry reconciliation against a remote specification source.

Each versioning strategy resolves a remote identifier, fetches the artifact,
fingerprints it and classifies the change. Strategies share fingerprinting,
version extraction and update construction; they differ in how the
identifier is discovered and where the artifact is filed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from specwatch.domain.errors import ExtractionFailureError, TrackerError
from specwatch.domain.model import UpdateType, VersioningStrategy

from .contracts import Failed, NoChange, Update
from .fingerprint import content_changed, fingerprint
from .rollouts import latest_rollout, split_rollout_path
from .version_extractor import extract_version

if TYPE_CHECKING:
    from collections.abc import Iterable

    from specwatch.domain.model import FetchedArtifact, ReleaseInfo, TrackedEntry
    from specwatch.domain.ports import SpecSource

    from .contracts import ReconciliationOutcome

log = getLogger(__name__)

DEFAULT_BRANCH = "main"


def target_directory(entry: TrackedEntry, version_segment: str) -> str:
    return f"{entry.vendor}/{entry.api}/{version_segment}"


def version_from_tag(tag: str) -> str:
    return tag[1:] if tag.startswith("v") and len(tag) > 1 else tag


@dataclass(slots=True)
class ReconciliationEngine:
    """Decide, per tracked entry, whether a new remote revision exists."""

    source: SpecSource
    default_branch: str = DEFAULT_BRANCH

    def reconcile(self, entry: TrackedEntry) -> ReconciliationOutcome:
        """Reconcile ``entry`` without mutating it."""

        try:
            match entry.versioning_strategy:
                case VersioningStrategy.RELEASE_TAG:
                    outcome = self._reconcile_release_tag(entry)
                case VersioningStrategy.FILE_BASED:
                    outcome = self._reconcile_file_based(entry)
                case VersioningStrategy.ROLLOUT_BASED:
                    outcome = self._reconcile_rollout_based(entry)
                case _:
                    msg = f"Unsupported versioning strategy: {entry.versioning_strategy}"
                    raise ValueError(msg)
        except TrackerError as exc:
            log.warning("%s: %s failure: %s", entry.key, exc.kind, exc)
            return Failed(entry=entry, reason=str(exc), kind=exc.kind)

        if isinstance(outcome, Update):
            log.info(
                "%s: %s update %s -> %s (api version %s)",
                entry.key,
                outcome.update_type,
                outcome.old_version or "<none>",
                outcome.new_version,
                outcome.api_version,
            )
        else:
            log.debug("%s: no change%s", entry.key, f" ({outcome.reason})" if outcome.reason else "")
        return outcome

    def reconcile_all(self, entries: Iterable[TrackedEntry]) -> list[ReconciliationOutcome]:
        """Reconcile entries one at a time, preserving input order."""

        return [self.reconcile(entry) for entry in entries]

    def _branch_for(self, entry: TrackedEntry) -> str:
        return entry.branch or self.default_branch

    def _reconcile_release_tag(self, entry: TrackedEntry) -> ReconciliationOutcome:
        release = self.source.latest_release(entry.owner, entry.repo)
        if not release.is_published:
            return NoChange(
                entry=entry,
                reason=f"latest release {release.tag} is a draft or pre-release",
            )

        version_changed = release.tag != entry.last_version
        artifact = self._fetch_release_artifact(entry, release)
        digest = fingerprint(artifact.content)
        changed = content_changed(entry.last_content_hash, digest)
        update_type = UpdateType.classify(version_changed=version_changed, content_changed=changed)
        if update_type is None:
            return NoChange(entry=entry)

        api_version = extract_version(artifact.content) or version_from_tag(release.tag)
        return _build_update(
            entry,
            artifact=artifact,
            new_version=release.tag,
            api_version=api_version,
            target_dir=target_directory(entry, api_version),
            digest=digest,
            changed=changed,
            update_type=update_type,
        )

    def _fetch_release_artifact(self, entry: TrackedEntry, release: ReleaseInfo) -> FetchedArtifact:
        asset_name = entry.release_asset_name
        if asset_name and asset_name in release.asset_names:
            return self.source.fetch_release_asset(entry.owner, entry.repo, release.tag, asset_name)
        if asset_name:
            log.debug(
                "%s: release %s has no asset %r, reading %s at the tag",
                entry.key,
                release.tag,
                asset_name,
                entry.spec_path,
            )
        return self.source.fetch_file(entry.owner, entry.repo, release.tag, entry.spec_path)

    def _reconcile_file_based(self, entry: TrackedEntry) -> ReconciliationOutcome:
        branch = self._branch_for(entry)
        artifact = self.source.fetch_file(entry.owner, entry.repo, branch, entry.spec_path)
        digest = fingerprint(artifact.content)
        changed = content_changed(entry.last_content_hash, digest)

        api_version = extract_version(artifact.content)
        if api_version is None:
            raise ExtractionFailureError(
                f"No embedded version found in {entry.source_repository}@{branch}:{entry.spec_path}"
            )

        version_changed = api_version != entry.last_version
        update_type = UpdateType.classify(version_changed=version_changed, content_changed=changed)
        if update_type is None:
            return NoChange(entry=entry)

        return _build_update(
            entry,
            artifact=artifact,
            new_version=api_version,
            api_version=api_version,
            target_dir=target_directory(entry, api_version),
            digest=digest,
            changed=changed,
            update_type=update_type,
        )

    def _reconcile_rollout_based(self, entry: TrackedEntry) -> ReconciliationOutcome:
        branch = self._branch_for(entry)
        layout = split_rollout_path(entry.spec_path)
        rollout = str(
            latest_rollout(
                self.source,
                owner=entry.owner,
                repo=entry.repo,
                branch=branch,
                base_path=layout.base_path,
            )
        )

        rollout_changed = rollout != entry.last_version
        # rollout paths move with every rollout; an unchanged one reuses the stored path
        spec_path = layout.with_rollout(rollout) if rollout_changed else entry.spec_path
        artifact = self.source.fetch_file(entry.owner, entry.repo, branch, spec_path)
        digest = fingerprint(artifact.content)
        changed = content_changed(entry.last_content_hash, digest)
        update_type = UpdateType.classify(version_changed=rollout_changed, content_changed=changed)
        if update_type is None:
            return NoChange(entry=entry)

        api_version = extract_version(artifact.content) or rollout
        return _build_update(
            entry,
            artifact=artifact,
            new_version=rollout,
            api_version=api_version,
            target_dir=target_directory(entry, f"rollout-{rollout}"),
            digest=digest,
            changed=changed,
            update_type=update_type,
            spec_path=spec_path,
        )


def _build_update(
    entry: TrackedEntry,
    *,
    artifact: FetchedArtifact,
    new_version: str,
    api_version: str,
    target_dir: str,
    digest: str,
    changed: bool,
    update_type: UpdateType,
    spec_path: str | None = None,
) -> Update:
    updated_entry = replace(
        entry,
        last_version=new_version,
        last_content_hash=digest,
        spec_path=spec_path if spec_path is not None else entry.spec_path,
    )
    return Update(
        entry=entry,
        updated_entry=updated_entry,
        old_version=entry.last_version,
        new_version=new_version,
        api_version=api_version,
        download_url=artifact.download_url,
        target_dir=target_dir,
        local_path=f"{target_dir}/{artifact.filename}",
        content_changed=changed,
        update_type=update_type,
        content_hash=digest,
        artifact=artifact,
    )


__all__ = ["DEFAULT_BRANCH", "ReconciliationEngine", "target_directory", "version_from_tag"]
