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

from ..formdata.exceptions import UnknownEnctypeError
from ..loader import Loader
from .base import DEFAULT_CHARSET, Encoder, charset_override, encode_text, resolve_charset
from .multipart import MultipartEncoder, encode_multipart
from .plaintext import PlaintextEncoder, encode_plaintext
from .urlencoded import UrlEncodedEncoder, encode_urlencoded

logger = logging.getLogger(__name__)

# enctype -> name of the implementation in the formwire_loader_encoder entry point group
ENCTYPES = {
    MultipartEncoder.enctype: "multipart",
    UrlEncodedEncoder.enctype: "urlencoded",
    PlaintextEncoder.enctype: "plaintext",
}


def get_encoder(enctype: str) -> Encoder:
    """Get an encoder instance for a form enctype.

    :param enctype: ``multipart/form-data``, ``application/x-www-form-urlencoded`` or ``text/plain``
        (case-insensitive)
    :type enctype: str
    :raises UnknownEnctypeError: if no encoder is known for ``enctype``
    :return: the encoder
    :rtype: Encoder
    """
    class_name = ENCTYPES.get((enctype or "").strip().lower())
    if class_name is None:
        raise UnknownEnctypeError(f"Unknown form enctype: {enctype}")

    try:
        encoder_cls = Loader.get("encoder", class_name=class_name)
    except RuntimeError as e:
        raise UnknownEnctypeError(f"No encoder available for {enctype}", additional_context=e) from e

    logger.debug("Using %s for %s", encoder_cls.__name__, enctype)
    return encoder_cls()
