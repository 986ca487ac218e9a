"""Ports for submitting reviewable change requests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class ChangeSubmitter(Protocol):
    """Open a change request containing the given workspace files."""

    def submit_change(
        self,
        *,
        branch_name: str,
        base_branch: str,
        title: str,
        body: str,
        paths: Sequence[str],
        labels: Sequence[str] = (),
    ) -> str: ...


__all__ = ["ChangeSubmitter"]
