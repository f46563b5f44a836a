"""Archive of computed plans under the data root."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

PLAN_FILENAME = "plan.json"


class FileStorage:
    """One timestamped run directory per archived plan, below ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "plan") -> Path:
        # Microseconds keep two plans computed within one second apart
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = self.output_root / f"{prefix}_{timestamp}"
        path.mkdir(parents=True, exist_ok=False)
        return path

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_plan(self, run_dir: Path, payload: dict[str, Any]) -> Path:
        """Store an archived plan (route, cost, plan and legs) in ``run_dir``."""
        path = run_dir / PLAN_FILENAME
        self.write_json(path, payload)
        return path

    def archive_plan(self, payload: dict[str, Any], *, prefix: str = "plan") -> Path:
        return self.write_plan(self.make_run_directory(prefix=prefix), payload).parent

    def read_plan(self, run_dir: Path) -> dict[str, Any]:
        with (run_dir / PLAN_FILENAME).open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def list_runs(self, prefix: str = "plan") -> list[Path]:
        """Run directories holding an archived plan, oldest first."""
        return sorted(
            path
            for path in self.output_root.glob(f"{prefix}_*")
            if path.is_dir() and (path / PLAN_FILENAME).exists()
        )
