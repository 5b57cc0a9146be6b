"""
Error types raised by the data layer.

Every failed store call (connection, auth or query error) surfaces as
DataAccessError. Feed generation lets it propagate; match checking logs it.
"""


class DataAccessError(Exception):
    """A read or write against the relational store failed"""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class DuplicateSwipeError(DataAccessError):
    """The user already swiped this title in this context"""
