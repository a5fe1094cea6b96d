"""
Markup serialization sink for fields.

XmlFieldWriter mirrors the pull-serializer contract fields are written
through: start a tag, add attributes, write text, end the tag. It sits
on the stdlib XMLGenerator, holding a start tag back only until its
attributes are complete. Output goes straight to the wrapped stream, so
OSErrors raised by the stream reach the caller unchanged.
"""

from typing import TextIO
from xml.sax.saxutils import XMLGenerator


class XmlFieldWriter:
    """Writes field markup to a text stream.

    Args:
        stream: A writable text stream (file, StringIO).
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._generator = XMLGenerator(stream, encoding="utf-8", short_empty_elements=True)
        self._open_tags: list[str] = []
        self._pending: tuple[str, dict[str, str]] | None = None

    def start_tag(self, name: str) -> "XmlFieldWriter":
        """Open a new element. Attributes may follow until content is written."""
        self._emit_pending_start_tag()
        self._pending = (name, {})
        self._open_tags.append(name)
        return self

    def attribute(self, name: str, value: str) -> "XmlFieldWriter":
        """Add an attribute to the element opened by the last start_tag."""
        if self._pending is None:
            raise RuntimeError(f"Attribute '{name}' written outside of a start tag")
        self._pending[1][name] = value
        return self

    def text(self, value: str) -> "XmlFieldWriter":
        """Write escaped text content into the current element."""
        self._emit_pending_start_tag()
        self._generator.characters(value)
        return self

    def end_tag(self, name: str) -> "XmlFieldWriter":
        """Close the current element, which must be named `name`."""
        if not self._open_tags or self._open_tags[-1] != name:
            raise RuntimeError(f"End tag '{name}' does not match an open element")
        self._emit_pending_start_tag()
        self._open_tags.pop()
        self._generator.endElement(name)
        return self

    def flush(self) -> None:
        """Flush the underlying stream."""
        self._emit_pending_start_tag()
        self._stream.flush()

    def _emit_pending_start_tag(self) -> None:
        if self._pending is not None:
            name, attrs = self._pending
            self._pending = None
            self._generator.startElement(name, attrs)
