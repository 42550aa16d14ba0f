from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from tableset.core.options import RenderFn, TableSetOptions


@dataclass
class DashboardConfig:
    """
    Parsed dashboard.json.
    """
    ui_title: str
    dimensions: List[str]
    metrics: List[str]
    options: Dict[str, Any]
    source_path: Path
    data_file: Optional[Path] = None

    def table_set_options(self, render_fn: Optional[RenderFn] = None) -> TableSetOptions:
        raw = dict(self.options)
        if render_fn is not None:
            raw["render_fn"] = render_fn
        return TableSetOptions.from_dict(raw)
