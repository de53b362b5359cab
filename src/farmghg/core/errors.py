"""Exceptions raised by the emissions core.

Network errors live in farmghg.core.client.
"""


class FarmGHGError(Exception):
    """Base class for calculation and configuration errors."""

    pass


class MissingCoefficientError(FarmGHGError):
    """Raised when a coefficient table has no entry for a key combination."""

    def __init__(self, table: str, key: object):
        self.table = table
        self.key = key
        super().__init__(f"No {table} coefficient for {key!r}")


class InvalidManagementPeriodError(FarmGHGError):
    """Raised when a group's management periods overlap, leave gaps or are malformed."""

    def __init__(self, group_name: str, message: str):
        self.group_name = group_name
        super().__init__(f"Group '{group_name}': {message}")


class FarmConfigError(FarmGHGError):
    """Raised when a farm file cannot be turned into a farm."""

    pass
