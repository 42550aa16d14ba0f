from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from tableset.config.loader import load_dashboard_config, load_data_cube
from tableset.core.data_cube import DataCube
from tableset.core.table_set import TableSet
from tableset.demo import add_click_through_rate
from tableset.ui.layout.build_layout import build_layout
from tableset.ui.callbacks.callbacks_tables import register_table_callbacks

logger = logging.getLogger(__name__)


def create_dash_app(
    config_root: Path | str = Path("config"),
    data_cube: Optional[DataCube] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    dashboard_config = load_dashboard_config(config_root)

    # 2) Data + TableSet
    if data_cube is None:
        data_cube = load_data_cube(dashboard_config)

    render_fn = None
    if {"clicks", "impressions"}.issubset(data_cube.metrics):
        render_fn = add_click_through_rate

    table_set = TableSet(data_cube, dashboard_config.table_set_options(render_fn=render_fn))

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        dashboard_config=dashboard_config,
        table_set=table_set,
    )

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
    )
    app.title = dashboard_config.ui_title

    # Tables are on a live layout surface from here on
    table_set.relayout()
    app.layout = build_layout(ctx)

    register_table_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"config_root": str(config_root), "n_views": len(table_set.views)},
    )
    return app
