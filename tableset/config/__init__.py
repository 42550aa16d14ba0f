"""
Config package for tableset.

Responsible for:
- config model (DashboardConfig)
- config I/O helpers (load_dashboard_config / load_data_cube)
"""

from .model import DashboardConfig
from .loader import load_dashboard_config, load_data_cube
