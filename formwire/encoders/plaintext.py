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
from typing import Iterable, Optional

from ..formdata.entries import Entry
from .base import Encoder, charset_override, resolve_charset, text_entries


def encode_plaintext(entries: Iterable[Entry], charset: Optional[str] = None) -> str:
    """Apply the text/plain encoding algorithm: one ``name=value`` line per
    text entry, terminated by CRLF, without any escaping.

    The result is meant to be encoded in ``charset`` by whoever sends it.
    Binary entries are skipped.
    """
    charset = resolve_charset(charset)
    return "".join(
        f"{entry.name}={charset_override(entry, charset)}\r\n"
        for entry in text_entries(entries)
    )


class PlaintextEncoder(Encoder):
    enctype = "text/plain"

    def encode(self, form_data_set, charset: Optional[str] = None) -> str:
        return encode_plaintext(form_data_set.entries, charset)

    def content_type(self, form_data_set, charset: Optional[str] = None) -> str:
        return f"{self.enctype}; charset={resolve_charset(charset)}"
