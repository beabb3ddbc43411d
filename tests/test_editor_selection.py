"""Tests for asset_editor.core.editor_selection and the editor session."""

import math

import pytest

from asset_editor.constants import ALL_MODULES, DEFAULT_SCOPE_PATH, MAX_CREATE_COUNT
from asset_editor.core.editor_selection import EditorKind, coerce_edit, select_editor
from asset_editor.core.session import EditorSession
from asset_editor.models.asset import (
    Color,
    ColorUsage,
    FieldDescriptor,
    Min,
    Range,
    TextArea,
    ValueKind,
)

from sample_assets import BOW, POTION, WEAPON


def _field(kind, constraint=None, name="value"):
    return FieldDescriptor(name, kind, constraint)


class TestSelectEditor:

    @pytest.mark.parametrize("kind, constraint, expected", [
        (ValueKind.FLOAT, Range(0, 1), EditorKind.FLOAT_SLIDER),
        (ValueKind.INTEGER, Range(0, 10), EditorKind.INT_SLIDER),
        (ValueKind.FLOAT, Min(0), EditorKind.FLOAT_MIN),
        (ValueKind.INTEGER, Min(1), EditorKind.INT_MIN),
        (ValueKind.STRING, TextArea(5), EditorKind.TEXT_AREA),
        (ValueKind.COLOR, None, EditorKind.COLOR),
        (ValueKind.INTEGER, None, EditorKind.INT),
        (ValueKind.FLOAT, None, EditorKind.FLOAT),
        (ValueKind.BOOLEAN, None, EditorKind.BOOL),
        (ValueKind.STRING, None, EditorKind.STRING),
        (ValueKind.REFERENCE, None, EditorKind.REFERENCE),
        (ValueKind.OPAQUE, None, EditorKind.GENERIC),
    ])
    def test_priority_table(self, kind, constraint, expected):
        assert select_editor(_field(kind, constraint)).kind is expected

    @pytest.mark.parametrize("kind, constraint, expected", [
        (ValueKind.STRING, Range(0, 1), EditorKind.STRING),
        (ValueKind.BOOLEAN, Min(0), EditorKind.BOOL),
        (ValueKind.INTEGER, TextArea(3), EditorKind.INT),
    ])
    def test_inapplicable_constraint_falls_back(self, kind, constraint, expected):
        assert select_editor(_field(kind, constraint)).kind is expected

    def test_range_bounds(self):
        spec = select_editor(_field(ValueKind.INTEGER, Range(1.7, 9.2)))
        assert (spec.minimum, spec.maximum) == (1, 9)
        assert all(isinstance(v, int) for v in (spec.minimum, spec.maximum))

    def test_text_area_lines(self):
        assert select_editor(_field(ValueKind.STRING, TextArea(6))).min_lines == 6
        assert select_editor(_field(ValueKind.STRING, TextArea(0))).min_lines == 1

    def test_color_hints(self):
        default = select_editor(_field(ValueKind.COLOR))
        assert (default.show_alpha, default.hdr) == (True, False)
        hinted = select_editor(_field(ValueKind.COLOR, ColorUsage(show_alpha=False, hdr=True)))
        assert (hinted.show_alpha, hinted.hdr) == (False, True)


class TestCoerceEdit:

    def test_int_range_clamped(self):
        spec = select_editor(_field(ValueKind.INTEGER, Range(0, 100)))
        assert coerce_edit(spec, 150) == 100
        assert coerce_edit(spec, -5) == 0
        assert coerce_edit(spec, "42") == 42

    def test_float_min_clamped(self):
        spec = select_editor(_field(ValueKind.FLOAT, Min(0.5)))
        assert coerce_edit(spec, 0.1) == 0.5
        assert coerce_edit(spec, 1e6) == 1e6

    def test_float_rejects_non_finite(self):
        spec = select_editor(_field(ValueKind.FLOAT))
        with pytest.raises(ValueError):
            coerce_edit(spec, math.nan)

    def test_int_rejects_garbage(self):
        with pytest.raises(ValueError):
            coerce_edit(select_editor(_field(ValueKind.INTEGER)), "abc")

    def test_string_and_bool(self):
        assert coerce_edit(select_editor(_field(ValueKind.STRING)), None) == ""
        assert coerce_edit(select_editor(_field(ValueKind.BOOLEAN)), 1) is True

    def test_color_clamped_unless_hdr(self):
        ldr = select_editor(_field(ValueKind.COLOR))
        assert coerce_edit(ldr, Color(2.0, -1.0, 0.5, 1.0)) == Color(1.0, 0.0, 0.5, 1.0)
        hdr = select_editor(_field(ValueKind.COLOR, ColorUsage(hdr=True)))
        assert coerce_edit(hdr, (2.0, 1.0, 0.5, 1.0)) == Color(2.0, 1.0, 0.5, 1.0)

    def test_generic_passthrough(self):
        value = ["a", "b"]
        assert coerce_edit(select_editor(_field(ValueKind.OPAQUE)), value) is value


class TestEditorSession:

    def test_defaults(self):
        session = EditorSession()
        assert session.scope_path == DEFAULT_SCOPE_PATH
        assert session.module_filter == ALL_MODULES
        assert session.selected_type is None

    def test_sessions_are_independent(self):
        a, b = EditorSession(), EditorSession()
        a.search.instance_filter = "axe"
        a.set_types([WEAPON])
        assert b.search.instance_filter == ""
        assert b.types == []

    def test_set_types_selects_first(self):
        session = EditorSession()
        session.set_types([BOW, WEAPON])
        assert session.selected_type == BOW

    def test_set_types_keeps_previous_selection(self):
        session = EditorSession()
        session.set_types([BOW, POTION, WEAPON])
        session.selected_type_index = 2
        session.set_types([POTION, WEAPON])
        assert session.selected_type == WEAPON

    def test_set_types_clamps_when_selection_gone(self):
        session = EditorSession()
        session.set_types([BOW, POTION, WEAPON])
        session.selected_type_index = 2
        session.set_types([BOW, POTION])
        assert session.selected_type == POTION

    def test_set_types_empty(self):
        session = EditorSession()
        session.set_types([WEAPON])
        session.set_types([])
        assert session.selected_type_index == -1

    @pytest.mark.parametrize("requested, expected", [(0, 1), (5, 5), (1000, MAX_CREATE_COUNT)])
    def test_create_count_clamped(self, requested, expected):
        session = EditorSession()
        assert session.set_create_count(requested) == expected
        assert session.create_count == expected
