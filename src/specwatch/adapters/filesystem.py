"""Local filesystem sink for published artifacts."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from specwatch.domain.errors import PersistFailureError

if TYPE_CHECKING:
    from collections.abc import Mapping

METADATA_FILENAME = "metadata.json"


@dataclass(slots=True)
class LocalArtifactSink:
    """Write artifacts below ``workspace_dir / specs_dirname``.

    Paths handed in are relative to the specs directory; returned paths are
    relative to the workspace so they can be committed as-is. Existing files
    are overwritten.
    """

    workspace_dir: Path
    specs_dirname: str = "specs"

    def write_artifact(self, path: str, content: str) -> str:
        return self._write(PurePosixPath(path), content)

    def write_metadata(self, directory: str, metadata: Mapping[str, object]) -> str:
        text = json.dumps(dict(metadata), indent=2, ensure_ascii=False) + "\n"
        return self._write(PurePosixPath(directory) / METADATA_FILENAME, text)

    def _write(self, relative: PurePosixPath, content: str) -> str:
        if relative.is_absolute() or ".." in relative.parts:
            raise PersistFailureError(f"Refusing to write outside the specs directory: {relative}")
        workspace_relative = PurePosixPath(self.specs_dirname) / relative
        target = self.workspace_dir / Path(*workspace_relative.parts)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise PersistFailureError(f"Cannot write {target}: {exc}") from exc
        return workspace_relative.as_posix()
