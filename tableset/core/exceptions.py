class TableSetError(Exception):
    """Base exception for all tableset errors"""
    pass

class InvalidConfiguration(TableSetError):
    """Missing or inconsistent TableSet options or dashboard.json"""
    pass

class DataCubeError(TableSetError):
    """
    Query doesn't match what the DataCube holds
    unknown dimensions in select/where, rows missing dimension columns, etc
    """
    pass
