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

_LINE_BREAK = re.compile("\r\n|\r|\n")


def normalize(value: str) -> str:
    """Replace every "CR" not followed by "LF", and every "LF" not preceded by
    "CR", by a "CRLF" pair. Existing "CRLF" pairs are left untouched.

    :param value: the value to normalize
    :type value: str
    :return: the normalized value
    :rtype: str
    """
    return "\r\n".join(_LINE_BREAK.split(value))
