"""
Core domain layer: data cube, filter state, query policy, click-to-filter
rules, view base class and the TableSet coordinator
"""

from .data_cube import DataCube, QueryResult
from .filter_state import FilterState
from .base_view import BaseView
from .table_set import TableSet

__all__ = ["DataCube", "QueryResult", "FilterState", "BaseView", "TableSet"]
