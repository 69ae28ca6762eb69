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
from urllib.parse import quote_plus

from ..formdata.entries import Entry
from .base import Encoder, charset_override, encode_text, resolve_charset, text_entries


def _serialize(value: str, charset: str) -> str:
    # quote_plus() keeps "~" as-is, the form byte serializer does not.
    return quote_plus(encode_text(value, charset), safe="*").replace("~", "%7E")


def encode_urlencoded(entries: Iterable[Entry], charset: Optional[str] = None) -> str:
    """Apply the application/x-www-form-urlencoded encoding algorithm.

    Names and values are encoded in ``charset`` (unencodable characters become
    numeric character references) then percent-encoded, spaces becoming ``+``.
    Binary entries are skipped.

    :param entries: entries, in the order they have to be serialized
    :param charset: optional explicit charset, defaults to utf-8
    :rtype: str
    """
    charset = resolve_charset(charset)
    return "&".join(
        f"{_serialize(entry.name, charset)}={_serialize(charset_override(entry, charset), charset)}"
        for entry in text_entries(entries)
    )


class UrlEncodedEncoder(Encoder):
    enctype = "application/x-www-form-urlencoded"

    def encode(self, form_data_set, charset: Optional[str] = None) -> str:
        return encode_urlencoded(form_data_set.entries, charset)
