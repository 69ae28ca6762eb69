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
import random
import unittest

from formwire.formdata import (
    BinaryEntry, BoundaryExhausted, BoundaryGenerator, EntryKind, FormDataSet,
    FormDataValidationError, TextEntry
)
from formwire.formdata.boundary import BOUNDARY_ALPHABET, BOUNDARY_PREFIX, BOUNDARY_TOKEN_LENGTH


class ConstantRandom:
    """Random source always picking the first element, so every boundary is the same."""
    def choice(self, seq):
        return seq[0]


class TestBoundaryGenerator(unittest.TestCase):

    def test_generate_uses_prefix_and_alphabet(self):
        boundary = BoundaryGenerator().generate()

        assert boundary.startswith(BOUNDARY_PREFIX)
        token = boundary[len(BOUNDARY_PREFIX):]
        assert len(token) == BOUNDARY_TOKEN_LENGTH
        assert all(c in BOUNDARY_ALPHABET for c in token)

    def test_generate_is_reproducible_with_seeded_random_source(self):
        first = BoundaryGenerator(random.Random(1234))
        second = BoundaryGenerator(random.Random(1234))

        assert [first.generate() for _ in range(3)] == [second.generate() for _ in range(3)]

    def test_successive_boundaries_differ(self):
        generator = BoundaryGenerator(random.Random(1234))
        assert generator.generate() != generator.generate()


class TestFormDataSetBoundary(unittest.TestCase):

    def test_boundary_is_regenerated_when_appended_value_contains_it(self):
        early_candidate = BoundaryGenerator(random.Random(42)).generate()
        form = FormDataSet(boundary_generator=BoundaryGenerator(random.Random(42)))
        assert form.boundary == early_candidate

        value = f"some text {early_candidate} more text"
        form.append("field", value, "text")

        assert form.boundary != early_candidate
        assert form.boundary not in value

    def test_boundary_is_regenerated_when_appended_name_contains_it(self):
        form = FormDataSet(boundary="name-boundary")
        form.append("the-name-boundary", "value", "text")

        assert form.boundary != "name-boundary"

    def test_boundary_is_regenerated_when_binary_value_contains_it(self):
        form = FormDataSet(boundary="BINARY")
        form.append("upload", b"\x00\x01BINARY\xff", "file")

        assert form.boundary != "BINARY"
        assert form.boundary.encode("ascii") not in b"\x00\x01BINARY\xff"

    def test_new_boundary_is_checked_against_previous_entries(self):
        generator = BoundaryGenerator(random.Random(7))
        first, second, third = generator.generate(), generator.generate(), generator.generate()

        form = FormDataSet(boundary_generator=BoundaryGenerator(random.Random(7)))
        assert form.boundary == first

        # Safe against the current boundary, but not against the next candidate.
        form.append("a", f"contains {second}", "text")
        assert form.boundary == first

        # Forces a regeneration: the second candidate collides with the first entry.
        form.append("b", f"contains {first}", "text")
        assert form.boundary == third

    def test_boundary_never_appears_in_any_entry(self):
        form = FormDataSet(boundary_generator=BoundaryGenerator(random.Random(3)))
        values = []
        for i in range(5):
            value = f"{i}: {form.boundary}"
            values.append(value)
            form.append(f"field{i}", value, "text")

        for value in values:
            assert form.boundary not in value

    def test_boundary_is_kept_without_collision(self):
        form = FormDataSet(boundary="B")
        form.append("field", "value", "text")

        assert form.boundary == "B"

    def test_explicit_boundary_is_validated(self):
        for boundary in ("", "caf\u00e9", "with space", "quote\"", "x" * 71):
            with self.assertRaises(FormDataValidationError):
                FormDataSet(boundary=boundary)

    def test_explicit_boundary_of_maximum_length(self):
        form = FormDataSet(boundary="x" * 70)
        form.append("field", "value", "text")

        assert form.boundary == "x" * 70

    def test_exhausted_boundary_generator_raises(self):
        generator = BoundaryGenerator(ConstantRandom(), max_attempts=3)
        form = FormDataSet(boundary_generator=generator)
        stuck_boundary = form.boundary

        with self.assertRaises(BoundaryExhausted):
            form.append("field", f"x{stuck_boundary}x", "text")

        # The rejected entry isn't stored.
        assert len(form) == 0
        assert form.boundary == stuck_boundary


class TestFormDataSetAppend(unittest.TestCase):

    def test_text_entry_is_stored_as_is(self):
        form = FormDataSet()
        form.append("field", "line1\nline2", "text")

        entry, = form.entries
        assert isinstance(entry, TextEntry)
        assert entry.kind is EntryKind.TEXT
        assert entry == TextEntry(name="field", type="text", value="line1\nline2")

    def test_textarea_name_and_value_are_normalized(self):
        form = FormDataSet()
        form.append("multi\nline", "line1\nline2\rline3", "TextArea")

        entry, = form.entries
        assert entry.name == "multi\r\nline"
        assert entry.value == "line1\r\nline2\r\nline3"

    def test_file_entry_name_is_normalized(self):
        form = FormDataSet()
        form.append("up\nload", b"a\nb", "FILE", filename="f.txt", content_type="text/plain")

        entry, = form.entries
        assert isinstance(entry, BinaryEntry)
        assert entry.kind is EntryKind.BINARY
        assert entry.name == "up\r\nload"
        # Binary payloads are never touched.
        assert entry.value == b"a\nb"
        assert entry.filename == "f.txt"
        assert entry.content_type == "text/plain"

    def test_binary_entry_with_other_type_keeps_its_name(self):
        form = FormDataSet()
        form.append("raw\nname", bytearray(b"data"), "hidden")

        entry, = form.entries
        assert entry.name == "raw\nname"
        assert entry.value == b"data"
        assert isinstance(entry.value, bytes)

    def test_empty_name_is_rejected(self):
        form = FormDataSet()

        with self.assertRaises(FormDataValidationError):
            form.append("", "value", "text")
        with self.assertRaises(FormDataValidationError):
            form.append(None, b"value", "file")
        assert len(form) == 0

    def test_validation_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            FormDataSet().append("", "value", "text")

    def test_control_characters_in_content_type_are_rejected(self):
        form = FormDataSet(boundary="B")

        with self.assertRaises(FormDataValidationError):
            form.append("f", b"x", "file", content_type="text/plain\r\nX-Injected: 1")
        with self.assertRaises(FormDataValidationError):
            form.append("f", b"x", "file", content_type="text/plain\r\n--B")
        with self.assertRaises(FormDataValidationError):
            form.append("f", b"x", "image/png\nX-Injected: 1")
        with self.assertRaises(FormDataValidationError):
            form.append("f", b"x", "file", content_type="text/plain\x00")

        assert len(form) == 0
        assert form.as_multipart() == b"--B--\r\n"

    def test_content_type_parameters_are_accepted(self):
        form = FormDataSet()
        form.append("f", b"x", "file", content_type="text/plain; charset=utf-8")

        assert form.entries[0].content_type == "text/plain; charset=utf-8"

    def test_unsupported_value_type_is_rejected(self):
        with self.assertRaises(TypeError):
            FormDataSet().append("number", 42, "text")

    def test_entries_are_immutable(self):
        form = FormDataSet()
        form.append("field", "value", "text")

        with self.assertRaises(AttributeError):
            form.entries[0].value = "other"


class TestFormDataSetNames(unittest.TestCase):

    def setUp(self):
        self.form = FormDataSet()
        for name in ("x", "y", "z"):
            self.form.append(name, "value", "text")

    def test_names_preserve_insertion_order(self):
        assert list(self.form.names()) == ["x", "y", "z"]

    def test_names_can_be_enumerated_again(self):
        assert list(self.form.names()) == list(self.form.names())
        assert list(self.form) == ["x", "y", "z"]
        assert list(self.form) == ["x", "y", "z"]

    def test_names_are_lazy(self):
        names = self.form.names()
        assert iter(names) is names
        assert next(names) == "x"

    def test_duplicate_names_are_kept(self):
        self.form.append("x", "again", "text")

        assert list(self.form.names()) == ["x", "y", "z", "x"]
        assert len(self.form) == 4
