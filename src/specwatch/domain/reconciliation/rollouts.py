"""Discovery of numbered rollout directories."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from specwatch.domain.errors import NoRolloutsFoundError, PathFormatFailureError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from specwatch.domain.ports import SpecSource

log = getLogger(__name__)

ROLLOUTS_SEGMENT = "Rollouts"


@dataclass(frozen=True, slots=True)
class RolloutPath:
    """A spec path split around its ``Rollouts/<n>`` segment."""

    base_path: str
    rollout: str
    suffix: str

    def with_rollout(self, rollout: int | str) -> str:
        return f"{self.base_path}/{rollout}/{self.suffix}"


def split_rollout_path(spec_path: str) -> RolloutPath:
    """Split ``<prefix>/Rollouts/<n>/<suffix>`` into its parts."""

    marker = f"/{ROLLOUTS_SEGMENT}/"
    normalized = spec_path.strip("/")
    if normalized.startswith(f"{ROLLOUTS_SEGMENT}/"):
        prefix, remainder = "", normalized[len(ROLLOUTS_SEGMENT) + 1 :]
    else:
        prefix, sep, remainder = normalized.partition(marker)
        if not sep:
            raise PathFormatFailureError(
                f"Spec path {spec_path!r} has no '{marker}' segment"
            )

    rollout, _, suffix = remainder.partition("/")
    if not rollout or not suffix:
        raise PathFormatFailureError(
            f"Spec path {spec_path!r} must continue with '<rollout>/<file>' after '{marker}'"
        )

    base_path = f"{prefix}/{ROLLOUTS_SEGMENT}" if prefix else ROLLOUTS_SEGMENT
    return RolloutPath(base_path=base_path, rollout=rollout, suffix=suffix)


def parse_rollout_number(name: str) -> int | None:
    if name.isascii() and name.isdigit():
        return int(name)
    return None


def highest_rollout(names: Iterable[str]) -> int | None:
    numbers = [number for number in map(parse_rollout_number, names) if number is not None]
    return max(numbers, default=None)


def latest_rollout(
    source: SpecSource,
    *,
    owner: str,
    repo: str,
    branch: str,
    base_path: str,
) -> int:
    """Return the highest numbered entry directly below ``base_path``."""

    names = source.list_directory(owner, repo, branch, base_path)
    latest = highest_rollout(names)
    if latest is None:
        raise NoRolloutsFoundError(
            f"No numbered rollouts under {owner}/{repo}@{branch}:{base_path}"
        )
    log.debug("Latest rollout for %s/%s:%s is %s", owner, repo, base_path, latest)
    return latest


__all__ = [
    "RolloutPath",
    "highest_rollout",
    "latest_rollout",
    "parse_rollout_number",
    "split_rollout_path",
]
