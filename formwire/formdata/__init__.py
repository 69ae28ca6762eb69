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
from .boundary import BoundaryGenerator
from .dataset import FormDataSet
from .entries import BinaryEntry, Entry, EntryKind, TextEntry
from .exceptions import (
    BoundaryExhausted, FormDataError, FormDataValidationError,
    UnknownCharsetError, UnknownEnctypeError
)
from .normalizer import normalize
