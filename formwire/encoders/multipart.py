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
import re
from typing import Iterable, Optional

from ..formdata.entries import BinaryEntry, Entry, EntryKind
from ..formdata.normalizer import normalize
from .base import Encoder, charset_override, encode_text, resolve_charset

CRLF = b"\r\n"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

_UNSAFE_HEADER_CHARS = re.compile('["\x00-\x1f\x7f]')


def _escape(value: str) -> str:
    # Quoted header parameters can't hold quotes nor line breaks, they get percent-encoded
    # like browsers do ("\n" -> "%0A", "\r" -> "%0D", '"' -> "%22").
    return _UNSAFE_HEADER_CHARS.sub(lambda m: "%{:02X}".format(ord(m.group(0))), value)


def _part_content_type(entry: BinaryEntry) -> str:
    if entry.content_type:
        return entry.content_type
    if "/" in entry.type:
        return entry.type
    return DEFAULT_CONTENT_TYPE


def _part_headers(entry: Entry) -> str:
    disposition = f'Content-Disposition: form-data; name="{_escape(normalize(entry.name))}"'
    if entry.kind is EntryKind.TEXT:
        return disposition

    filename = entry.filename or entry.name
    return (
        f'{disposition}; filename="{_escape(normalize(filename))}"\r\n'
        f"Content-Type: {_part_content_type(entry)}"
    )


def encode_multipart(entries: Iterable[Entry], boundary: str, charset: Optional[str] = None) -> bytes:
    """Apply the multipart/form-data encoding algorithm (RFC 7578).

    Text values have their line breaks normalized and are encoded in ``charset``;
    names, filenames and text values fall back to numeric character references
    for characters ``charset`` can't express. Binary values are written as-is.

    :param entries: entries, in the order they have to be serialized
    :param boundary: delimiter of the sections, must not appear in any entry
    :param charset: optional explicit charset, defaults to utf-8
    :return: the multipart body
    :rtype: bytes
    """
    charset = resolve_charset(charset)
    delimiter = b"--" + boundary.encode("ascii")
    body = bytearray()

    for entry in entries:
        body += delimiter + CRLF
        body += encode_text(_part_headers(entry), charset) + CRLF + CRLF
        if entry.kind is EntryKind.TEXT:
            body += encode_text(normalize(charset_override(entry, charset)), charset)
        else:
            body += entry.value
        body += CRLF

    body += delimiter + b"--" + CRLF
    return bytes(body)


class MultipartEncoder(Encoder):
    enctype = "multipart/form-data"

    def encode(self, form_data_set, charset: Optional[str] = None) -> bytes:
        return encode_multipart(form_data_set.entries, form_data_set.boundary, charset)

    def content_type(self, form_data_set, charset: Optional[str] = None) -> str:
        return f"{self.enctype}; boundary={form_data_set.boundary}"
