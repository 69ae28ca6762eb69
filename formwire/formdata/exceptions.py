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


class FormDataError(Exception):
    """Base class for form data set specific exceptions"""
    def __init__(self, message, additional_context=None):
        self.message = message
        self.additional_context = additional_context
        super().__init__(self.message)


class FormDataValidationError(FormDataError, ValueError):
    """An entry was rejected at append time (for instance because its name is empty)."""


class BoundaryExhausted(FormDataError):
    """No collision-free multipart boundary could be generated.

    This should never happen with a working random source, so it has to be
    handled as being fatal: something is super-wrong with the boundary generator."""


class UnknownCharsetError(FormDataError, LookupError):
    """The requested charset is not known to the codec registry."""


class UnknownEnctypeError(FormDataError, ValueError):
    """No encoder is available for the requested form enctype."""
