"""
Copyright (c) 2023 Proton AG

This file is part of formwire.

formwire is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

formwire is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with formwire.  If not, see <https://www.gnu.org/licenses/>.
"""
import logging
import re
from typing import Iterable, Iterator, Optional, Tuple, Union

from .boundary import BOUNDARY_ALPHABET, BoundaryGenerator
from .entries import BinaryEntry, Entry, EntryKind, TextEntry
from .exceptions import BoundaryExhausted, FormDataValidationError
from .normalizer import normalize

logger = logging.getLogger(__name__)

# RFC 2046 caps boundaries at 70 characters.
MAX_BOUNDARY_LENGTH = 70

_CONTROL_CHARS = re.compile("[\x00-\x1f\x7f]")


class FormDataSet:
    """Bundles the entries of an HTML form, in tree order, and the boundary
    used to delimit them in a multipart body.

    Entries are immutable once appended. The set itself must not be appended to
    while one of the ``as_*`` methods is running: encoders read the entries
    without locking.

    .. code-block::

        form = FormDataSet()
        form.append("comment", "Hello\\nworld", "textarea")
        form.append("avatar", b"\\x89PNG...", "file", filename="me.png", content_type="image/png")
        body = form.as_multipart()
        headers = {"Content-Type": f"multipart/form-data; boundary={form.boundary}"}
    """
    def __init__(self, boundary: Optional[str] = None, boundary_generator: Optional[BoundaryGenerator] = None):
        self._boundary_generator = boundary_generator or BoundaryGenerator()
        if boundary is not None:
            _validate_boundary(boundary)
        self._boundary = boundary or self._boundary_generator.generate()
        self._entries = []

    @property
    def boundary(self) -> str:
        """:return: the boundary delimiting multipart sections, guaranteed not to appear in any entry
        :rtype: str
        """
        return self._boundary

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """:return: snapshot of the entries, in insertion order
        :rtype: tuple[Entry, ...]
        """
        return tuple(self._entries)

    def append(
            self, name: str, value: Union[str, bytes], type: str,
            filename: Optional[str] = None, content_type: Optional[str] = None
    ):
        """Append an entry at the end of the set.

        String values produce a text entry: if ``type`` is ``textarea`` both name
        and value get their line breaks normalized. Bytes values produce a binary
        entry: if ``type`` is ``file`` the name gets normalized. ``filename`` and
        ``content_type`` only apply to binary entries.

        :raises FormDataValidationError: if the name is empty, or if the type or content type
            of a binary entry holds control characters
        :raises TypeError: if the value is neither str nor bytes
        :raises BoundaryExhausted: if no collision-free boundary can be found
        """
        if not name:
            raise FormDataValidationError("Form entries need a non-empty name")
        type = type or ""

        if isinstance(value, str):
            if type.lower() == "textarea":
                name = normalize(name)
                value = normalize(value)
            entry = TextEntry(name=name, type=type, value=value)
        elif isinstance(value, (bytes, bytearray)):
            for header_value in (type, content_type or ""):
                if _CONTROL_CHARS.search(header_value):
                    raise FormDataValidationError(
                        "Control characters aren't allowed in the type of binary entries",
                        additional_context=header_value
                    )
            if type.lower() == "file":
                name = normalize(name)
            entry = BinaryEntry(
                name=name, type=type, value=bytes(value),
                filename=filename, content_type=content_type
            )
        else:
            raise TypeError(f"Unsupported form value type: {value.__class__.__name__}")

        self._check_boundary(entry)
        self._entries.append(entry)

    def names(self) -> Iterator[str]:
        """Enumerate entry names in insertion order. Each call starts over."""
        for entry in self._entries:
            yield entry.name

    def __iter__(self) -> Iterator[str]:
        return self.names()

    def __len__(self) -> int:
        return len(self._entries)

    def as_multipart(self, charset: Optional[str] = None) -> bytes:
        """Apply the multipart/form-data encoding algorithm.

        :param charset: optional explicit charset, defaults to utf-8
        :return: the body, to be sent along with :attr:`boundary`
        :rtype: bytes
        """
        from ..encoders.multipart import encode_multipart
        return encode_multipart(self.entries, self._boundary, charset)

    def as_urlencoded(self, charset: Optional[str] = None) -> str:
        """Apply the application/x-www-form-urlencoded encoding algorithm.

        Binary entries have no urlencoded form and are left out.
        """
        from ..encoders.urlencoded import encode_urlencoded
        return encode_urlencoded(self.entries, charset)

    def as_plaintext(self, charset: Optional[str] = None) -> str:
        """Apply the text/plain encoding algorithm.

        Binary entries are left out, like for :meth:`as_urlencoded`.
        """
        from ..encoders.plaintext import encode_plaintext
        return encode_plaintext(self.entries, charset)

    def _check_boundary(self, new_entry: Entry):
        # A new boundary has to be safe against every stored entry, not only the new one.
        if not self._collides(self._boundary, [new_entry]):
            return

        candidates = self._entries + [new_entry]
        for _ in range(self._boundary_generator.max_attempts):
            boundary = self._boundary_generator.generate()
            if not self._collides(boundary, candidates):
                logger.debug("Boundary collision on entry %r, switched boundary", new_entry.name)
                self._boundary = boundary
                return

        raise BoundaryExhausted(
            f"Couldn't find a boundary free of collisions after "
            f"{self._boundary_generator.max_attempts} attempts",
            additional_context=new_entry.name
        )

    @staticmethod
    def _collides(boundary: str, entries: Iterable[Entry]) -> bool:
        needle = boundary.encode("ascii")
        return any(needle in chunk for entry in entries for chunk in _serialized(entry))


def _validate_boundary(boundary: str):
    if not 0 < len(boundary) <= MAX_BOUNDARY_LENGTH or any(c not in BOUNDARY_ALPHABET for c in boundary):
        raise FormDataValidationError(
            f"Boundaries need 1 to {MAX_BOUNDARY_LENGTH} characters out of {BOUNDARY_ALPHABET!r}",
            additional_context=boundary
        )


def _serialized(entry: Entry) -> Tuple[bytes, ...]:
    name = entry.name.encode("utf-8")
    if entry.kind is EntryKind.TEXT:
        return name, entry.value.encode("utf-8")
    return name, (entry.filename or "").encode("utf-8"), entry.value
