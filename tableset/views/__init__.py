from .data_table_view import DataTableView

__all__ = ["DataTableView"]
