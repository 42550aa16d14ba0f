import json
from pathlib import Path

import pandas as pd
import pytest

from tableset.config.loader import load_dashboard_config, load_data_cube
from tableset.core.exceptions import InvalidConfiguration
from tableset.core.options import ChartSpec, LayoutOptions


def _write_config(root: Path, **overrides) -> Path:
    raw = {
        "ui_title": "Test Explorer",
        "dimensions": ["page", "country"],
        "metrics": ["impressions", "clicks"],
        "charts": ["totals", ["country", {"column": 1}]],
        "columns": ["impressions"],
        "sort": {"impressions": "desc"},
        "formatters": {"impressions": "thousands"},
    }
    raw.update(overrides)
    root.mkdir(parents=True, exist_ok=True)
    (root / "dashboard.json").write_text(json.dumps(raw))
    return root


def test_load_dashboard_config(tmp_path):
    root = _write_config(tmp_path / "config")

    cfg = load_dashboard_config(root)

    assert cfg.ui_title == "Test Explorer"
    assert cfg.dimensions == ["page", "country"]
    assert cfg.metrics == ["impressions", "clicks"]
    assert cfg.data_file is None

    options = cfg.table_set_options()
    assert options.charts == [ChartSpec("totals"), ChartSpec("country", LayoutOptions(1))]
    assert options.sort == {"impressions": "desc"}
    assert callable(options.formatters["impressions"])


def test_charts_default_to_dimensions(tmp_path):
    root = tmp_path / "config"
    _write_config(root)
    raw = json.loads((root / "dashboard.json").read_text())
    del raw["charts"]
    (root / "dashboard.json").write_text(json.dumps(raw))

    cfg = load_dashboard_config(root)

    assert [c.dimension for c in cfg.table_set_options().charts] == ["page", "country"]


def test_relative_data_file_resolved_against_root(tmp_path):
    root = _write_config(tmp_path / "config", data_file="data/rows.csv")

    cfg = load_dashboard_config(root)

    assert cfg.data_file == (root / "data" / "rows.csv").resolve()


def test_missing_config_raises(tmp_path):
    with pytest.raises(InvalidConfiguration):
        load_dashboard_config(tmp_path)


def test_invalid_json_raises(tmp_path):
    (tmp_path / "dashboard.json").write_text("{not json")

    with pytest.raises(InvalidConfiguration):
        load_dashboard_config(tmp_path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"dimensions": []},
        {"metrics": "impressions"},
        {"formatters": {"impressions": "millions"}},
        {"sort": {"impressions": "sideways"}},
        {"charts": [42]},
    ],
)
def test_bad_config_raises(tmp_path, overrides):
    root = _write_config(tmp_path / "config", **overrides)

    with pytest.raises(InvalidConfiguration):
        load_dashboard_config(root)


def test_load_data_cube_from_csv(tmp_path):
    root = _write_config(tmp_path / "config", data_file="rows.csv")
    pd.DataFrame(
        {
            "page": ["index.html", "about.html", "index.html"],
            "country": ["CHN", "USA", "USA"],
            "impressions": [1, 2, 3],
            "clicks": [0, 1, 1],
        }
    ).to_csv(root / "rows.csv", index=False)

    cube = load_data_cube(load_dashboard_config(root))

    assert len(cube) == 3
    assert cube.select([]).get_rows() == [{"impressions": 6, "clicks": 2}]


def test_load_data_cube_csv_missing_columns_raises(tmp_path):
    root = _write_config(tmp_path / "config", data_file="rows.csv")
    pd.DataFrame({"page": ["index.html"], "impressions": [1]}).to_csv(root / "rows.csv", index=False)

    with pytest.raises(InvalidConfiguration):
        load_data_cube(load_dashboard_config(root))


def test_load_data_cube_missing_file_raises(tmp_path):
    root = _write_config(tmp_path / "config", data_file="nope.csv")

    with pytest.raises(InvalidConfiguration):
        load_data_cube(load_dashboard_config(root))


def test_load_data_cube_defaults_to_fixture(tmp_path):
    root = _write_config(tmp_path / "config")

    cube = load_data_cube(load_dashboard_config(root))

    assert len(cube) == 100
    assert cube.dimension_values("page") == ["index.html", "pricing.html", "about.html", "signup.html"]
