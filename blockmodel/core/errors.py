"""
Exceptions raised by block model fields.
"""


class BlockLoadingError(Exception):
    """Raised when a field cannot be loaded from a block definition.

    Propagated to the document loader; fields never recover from it.
    """

    def __init__(self, message: str, field_name: str | None = None):
        self.field_name = field_name
        self.message = message
        super().__init__(message)


class InvalidFieldValueError(ValueError):
    """Raised when a field is handed a value it cannot represent."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        self.message = message
        super().__init__(f"Field '{field_name}': {message}")
