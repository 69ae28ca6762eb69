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
import secrets
import string

BOUNDARY_PREFIX = "----formwire"
BOUNDARY_TOKEN_LENGTH = 24
BOUNDARY_ALPHABET = string.ascii_letters + string.digits + "-_"
MAX_BOUNDARY_ATTEMPTS = 16


class BoundaryGenerator:
    """Produces multipart boundary candidates.

    The random source is anything providing a ``choice(sequence)`` method, like
    :class:`random.Random`. Pass a seeded instance to get reproducible boundaries
    (in tests for instance); by default :class:`secrets.SystemRandom` is used.

    :param random_source: source of randomness, defaults to ``secrets.SystemRandom()``
    :param max_attempts: how many fresh candidates may be tried for a single append
        before giving up with :class:`BoundaryExhausted`
    """
    def __init__(self, random_source=None, max_attempts: int = MAX_BOUNDARY_ATTEMPTS):
        self._random = random_source or secrets.SystemRandom()
        self.max_attempts = max_attempts

    def generate(self) -> str:
        """:return: a fresh boundary candidate
        :rtype: str
        """
        token = "".join(self._random.choice(BOUNDARY_ALPHABET) for _ in range(BOUNDARY_TOKEN_LENGTH))
        return BOUNDARY_PREFIX + token
