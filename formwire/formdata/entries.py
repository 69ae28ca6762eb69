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
import enum
from dataclasses import dataclass
from typing import ClassVar, Optional, Union


class EntryKind(enum.Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class TextEntry:
    """Form data set entry holding a string value."""
    kind: ClassVar[EntryKind] = EntryKind.TEXT

    name: str
    type: str
    value: str


@dataclass(frozen=True)
class BinaryEntry:
    """Form data set entry holding raw bytes (typically a file).

    :param filename: name of the file as it should be announced in the multipart
        body, the entry name is used if it's missing.
    :param content_type: MIME type of the payload.
    """
    kind: ClassVar[EntryKind] = EntryKind.BINARY

    name: str
    type: str
    value: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None


Entry = Union[TextEntry, BinaryEntry]
