from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tableset.config.model import DashboardConfig
from tableset.core.table_set import TableSet


@dataclass
class AppConfig:
    """
    Holds shared state for the Dash app: config root, the parsed dashboard
    config and the server-side TableSet. Passed into layout + callback
    registration functions instead of using module-level globals.
    """
    config_root: Path
    dashboard_config: DashboardConfig
    table_set: Optional[TableSet] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.table_set is None:
            raise RuntimeError("AppConfig.table_set must be initialized.")
