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
import codecs
from typing import Optional

from ..formdata.entries import EntryKind, TextEntry
from ..formdata.exceptions import UnknownCharsetError

DEFAULT_CHARSET = "utf-8"

# Python codec names whose registered name differs from the one used on the web.
_WEB_NAMES = {
    "ascii": "us-ascii",
    "euc_jp": "euc-jp",
    "euc_kr": "euc-kr",
    "iso2022_jp": "iso-2022-jp",
}


def resolve_charset(charset: Optional[str] = None) -> str:
    """Get the canonical name of a charset label.

    :param charset: charset label (``latin-1``, ``UTF8``...), defaults to utf-8
    :type charset: Optional[str]
    :raises UnknownCharsetError: if the label isn't known to the codec registry, or isn't
        a text encoding
    :return: canonical charset name, as announced in ``_charset_`` fields
    :rtype: str
    """
    if charset is None:
        return DEFAULT_CHARSET

    try:
        info = codecs.lookup(charset)
    except LookupError as e:
        raise UnknownCharsetError(f"Unknown charset: {charset}") from e
    # bytes-to-bytes and str-to-str codecs (hex, base64, rot13...)
    if not getattr(info, "_is_text_encoding", True):
        raise UnknownCharsetError(f"Not a text encoding: {charset}")
    name = info.name

    if name.startswith("iso8859-"):
        return "iso-8859-" + name[len("iso8859-"):]
    if name.startswith("cp125"):
        return "windows-" + name[len("cp"):]
    name = _WEB_NAMES.get(name, name)
    # Forms are never submitted with a BOM nor in UTF-16/32, browsers fall back to UTF-8.
    if name == "utf-8-sig" or name.startswith(("utf-16", "utf-32")):
        return DEFAULT_CHARSET
    return name


def encode_text(text: str, charset: str) -> bytes:
    """Encode ``text`` in ``charset``, replacing characters that can't be expressed
    with a base-10 numeric character reference (``&#NNN;``)."""
    return text.encode(charset, "xmlcharrefreplace")


def charset_override(entry: TextEntry, charset: str) -> str:
    """Value to serialize for a text entry.

    A hidden field named ``_charset_`` announces the charset used for the
    submission instead of its own value. The stored entry is left untouched.
    """
    if entry.name == "_charset_" and entry.type.lower() == "hidden":
        return charset
    return entry.value


def text_entries(entries):
    """Yield the text entries only, binary ones have no serialization outside of multipart."""
    for entry in entries:
        if entry.kind is EntryKind.TEXT:
            yield entry


class Encoder:
    """Base class of the form encoders.

    An encoder implements one of the form submission encoding algorithms,
    identified by its ``enctype``. Encoders are pluggable components, see
    :class:`formwire.loader.Loader`: the ones shipped with this package are
    registered in the ``formwire_loader_encoder`` entry point group.
    """
    enctype = None

    @classmethod
    def _get_priority(cls):
        return 10

    def encode(self, form_data_set, charset: Optional[str] = None):
        raise NotImplementedError("encode should be implemented")

    def content_type(self, form_data_set, charset: Optional[str] = None) -> str:
        """:return: the value of the Content-Type header to send along the encoded body
        :rtype: str
        """
        return self.enctype
