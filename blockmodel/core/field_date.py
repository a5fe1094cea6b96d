"""
Date field for block inputs.

The value is held as integer milliseconds since the Unix epoch and is
replaced wholesale on every change. Its string form is the canonical
YYYY-MM-DD, taken in the configured field time zone, which is also the
form it is saved and loaded in. That form has day granularity, so a
save/load round trip truncates the value to the start of its day.
"""

import logging
from datetime import date, datetime
from typing import Any, Protocol

from pydantic import ValidationError

from blockmodel.core.errors import BlockLoadingError, InvalidFieldValueError
from blockmodel.core.field import Field
from blockmodel.core.schema import FieldDateDefinition, FieldType
from blockmodel.core.utils import (
    check_millis_range,
    datetime_to_millis,
    format_date_millis,
    millis_to_datetime,
    now_millis,
    parse_date_string,
)

logger = logging.getLogger(__name__)


class FieldDateObserver(Protocol):
    """Listener for changes to a date field."""

    def on_date_changed(self, field: "FieldDate", old_millis: int, new_millis: int) -> None:
        """Called after the field's value changed.

        Args:
            field: The field that changed.
            old_millis: Previous value in UTC milliseconds since epoch.
            new_millis: New value in UTC milliseconds since epoch.
        """


class FieldDate(Field[FieldDateObserver]):
    """A date picker value attached to a block input.

    Args:
        name: Field name, unique within its block.
        value: Initial value. Epoch milliseconds, a datetime/date, or a
            YYYY-MM-DD string. Defaults to the current time. Setting the
            initial value does not notify anyone.

    Raises:
        InvalidFieldValueError: If a string value cannot be parsed, the
            value is not a supported type, or it is out of range.
    """

    def __init__(self, name: str, value: int | str | datetime | date | None = None):
        super().__init__(name, FieldType.DATE)
        if value is None:
            self._millis = now_millis()
        elif isinstance(value, str):
            try:
                self._millis = parse_date_string(value)
            except ValueError:
                raise InvalidFieldValueError(name, f"Invalid date: {value}")
        elif isinstance(value, (datetime, date)):
            self._millis = self._to_millis(value)
        else:
            self._millis = self._check_millis(value)

    @classmethod
    def from_json(cls, json_data: dict[str, Any]) -> "FieldDate":
        """Load a date field from its block definition.

        A missing or empty "date" leaves the field at the current time.

        Args:
            json_data: The field's JSON object, e.g.
                {"type": "field_date", "name": "DATE", "date": "2016-02-29"}.

        Returns:
            The loaded field.

        Raises:
            BlockLoadingError: If "name" is missing or empty, or "date" is
                present but not a valid YYYY-MM-DD date.
        """
        try:
            definition = FieldDateDefinition.model_validate(json_data)
        except ValidationError as e:
            raise BlockLoadingError(f"Invalid field_date definition: {e}")

        if not definition.name:
            raise BlockLoadingError('field_date "name" attribute must not be empty.')

        field = cls(definition.name)
        if definition.date and not field.set_from_string(definition.date):
            raise BlockLoadingError(
                f"Unable to parse date: {definition.date}", field_name=definition.name
            )
        return field

    def to_json(self) -> dict[str, str]:
        """Return the block definition for this field's current state."""
        return FieldDateDefinition(
            name=self.name,
            date=self.get_date_string(),
        ).model_dump()

    def clone(self) -> "FieldDate":
        """Return a copy with the same name and value but no observers."""
        return FieldDate(self.name, self._millis)

    # -----------------------------------------------------------------
    # Value access
    # -----------------------------------------------------------------

    def get_time(self) -> int:
        """Return the value in milliseconds since the Unix epoch."""
        return self._millis

    def get_date(self) -> datetime:
        """Return the value as an aware datetime in the field time zone."""
        return millis_to_datetime(self._millis)

    def set_date(self, value: datetime | date) -> None:
        """Set the value from a datetime or date.

        Naive values and plain dates are taken in the field time zone.

        Raises:
            InvalidFieldValueError: If value is None, not a date, or out
                of range.
        """
        if value is None:
            raise InvalidFieldValueError(self.name, "Date may not be None.")
        if not isinstance(value, (datetime, date)):
            raise InvalidFieldValueError(
                self.name, f"Expected a date, got {type(value).__name__}"
            )
        self.set_time(self._to_millis(value))

    def get_date_string(self) -> str:
        """Return the value in the canonical YYYY-MM-DD form."""
        return format_date_millis(self._millis)

    def set_from_string(self, text: str) -> bool:
        """Set the value from a YYYY-MM-DD string.

        Unlike the constructor this never raises: an unparseable string
        is logged and leaves the value unchanged.

        Returns:
            True if the string was parsed and applied, False otherwise.
        """
        try:
            millis = parse_date_string(text)
        except ValueError as e:
            logger.error("Unable to parse date %r for field %s: %s", text, self.name, e)
            return False
        self.set_time(millis)
        return True

    def set_time(self, millis: int) -> None:
        """Set the value in milliseconds since the Unix epoch.

        Observers are notified synchronously, in registration order, only
        when the value actually changes.

        Raises:
            InvalidFieldValueError: If millis is not an int or is outside
                the supported date range.
        """
        millis = self._check_millis(millis)
        old_millis = self._millis
        if millis == old_millis:
            return
        self._millis = millis
        self._on_date_changed(old_millis, millis)

    def get_serialized_value(self) -> str:
        return self.get_date_string()

    # -----------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------

    def _check_millis(self, millis: Any) -> int:
        if isinstance(millis, bool) or not isinstance(millis, int):
            raise InvalidFieldValueError(
                self.name, f"Expected milliseconds as int, got {type(millis).__name__}"
            )
        try:
            check_millis_range(millis)
        except ValueError as e:
            raise InvalidFieldValueError(self.name, str(e))
        return millis

    def _to_millis(self, value: datetime | date) -> int:
        try:
            millis = datetime_to_millis(value)
        except ValueError as e:
            raise InvalidFieldValueError(self.name, str(e))
        return self._check_millis(millis)

    def _on_date_changed(self, old_millis: int, new_millis: int) -> None:
        observers = self.get_observers()
        logger.debug(
            "Field %s changed %d -> %d, notifying %d observer(s)",
            self.name, old_millis, new_millis, len(observers),
        )
        for observer in observers:
            observer.on_date_changed(self, old_millis, new_millis)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldDate):
            return NotImplemented
        return self.name == other.name and self._millis == other._millis

    __hash__ = None

    def __repr__(self) -> str:
        return f"FieldDate(name={self.name!r}, date={self.get_date_string()!r})"
