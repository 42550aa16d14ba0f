from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from tableset.config.model import DashboardConfig
from tableset.core.options import TableSetOptions
from tableset.core.data_cube import DataCube
from tableset.core.exceptions import DataCubeError, InvalidConfiguration

logger = logging.getLogger(__name__)

CONFIG_FILE = "dashboard.json"
OPTION_KEYS = ("charts", "columns", "column_names", "sort", "formatters")


def _require_str_list(raw: Dict[str, Any], key: str, path: Path) -> List[str]:
    value = raw.get(key)
    if not isinstance(value, list) or not value or not all(isinstance(v, str) for v in value):
        raise InvalidConfiguration(f"'{key}' in {path} must be a non-empty list of strings")
    return value


def load_dashboard_config(root: Path | str) -> DashboardConfig:
    """
    Load the dashboard configuration from a config directory.

    Expected structure:

        root/
            dashboard.json
            data.csv        (optional, referenced by "data_file")

    dashboard.json holds:

    - ui_title: title for the UI, defaults to 'Table Set'
    - dimensions / metrics: the columns of the DataCube
    - charts, columns, column_names, sort, formatters: TableSet options
    - data_file: CSV with the rows, relative to root. If absent the demo fixture is used.

    :param root: Directory containing 'dashboard.json'.
    :return: A DashboardConfig instance.
    :raises InvalidConfiguration: if the file is missing or malformed.
    """
    root = Path(root)
    logger.info("Loading dashboard config", extra={"config_root": str(root)})

    path = root / CONFIG_FILE
    if not path.is_file():
        raise InvalidConfiguration(f"File not found at {path}")

    try:
        with path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfiguration(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise InvalidConfiguration(f"{path} must contain a JSON object")

    dimensions = _require_str_list(raw, "dimensions", path)
    metrics = _require_str_list(raw, "metrics", path)

    options = {k: raw[k] for k in OPTION_KEYS if k in raw}
    options.setdefault("charts", list(dimensions))

    # Validate early so a bad config fails at load time, not at first render
    TableSetOptions.from_dict(options)

    # Resolve data_file properly:
    # - Absolute paths are used as-is.
    # - Relative paths are resolved relative to the config root directory.
    data_file_raw = raw.get("data_file")
    if data_file_raw is None:
        data_file = None
    else:
        data_file = Path(data_file_raw)
        if not data_file.is_absolute():
            data_file = (root / data_file).resolve()

    return DashboardConfig(
        ui_title=raw.get("ui_title", "Table Set"),
        dimensions=dimensions,
        metrics=metrics,
        options=options,
        source_path=path,
        data_file=data_file,
    )


def load_data_cube(config: DashboardConfig) -> DataCube:
    """
    Build the DataCube described by a DashboardConfig, from its CSV file or
    from the demo fixture when no file is configured.
    """
    if config.data_file is None:
        from tableset.demo import create_rows_fixture

        cube = DataCube(config.dimensions, config.metrics, create_rows_fixture())
    else:
        if not config.data_file.is_file():
            raise InvalidConfiguration(f"Data file not found at {config.data_file}")
        frame = pd.read_csv(config.data_file)
        try:
            cube = DataCube.from_frame(frame, config.dimensions, config.metrics)
        except DataCubeError as e:
            raise InvalidConfiguration(f"{config.data_file}: {e}") from e

    logger.info(
        "Data cube loaded",
        extra={
            "data_file": str(config.data_file) if config.data_file else None,
            "n_rows": len(cube),
            "dimensions": cube.dimensions,
        },
    )
    return cube
