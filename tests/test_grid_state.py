"""Tests for asset_editor.core.grid_state — resize FSM, hit testing, intents."""

import pytest

from asset_editor.core.grid_state import (
    DeleteClicked,
    DragResize,
    DuplicateClicked,
    EditField,
    EndResize,
    FieldEdited,
    GridInteraction,
    PointerDown,
    PointerMove,
    PointerUp,
    RequestDelete,
    RequestDuplicate,
    StartResize,
    ToggleSort,
    hit_test,
)
from asset_editor.models.asset import FieldDescriptor, ValueKind

WIDTHS = [35.0, 35.0, 150.0, 100.0, 120.0]


class TestHitTest:

    def test_cell_body(self):
        assert hit_test(WIDTHS, 10) == (0, False)
        assert hit_test(WIDTHS, 100) == (2, False)
        assert hit_test(WIDTHS, 300) == (3, False)

    def test_handle_centred_on_right_edge(self):
        # column 2 spans 70..220
        assert hit_test(WIDTHS, 216) == (2, True)
        assert hit_test(WIDTHS, 220) == (2, True)
        assert hit_test(WIDTHS, 224) == (2, True)
        assert hit_test(WIDTHS, 225) == (3, False)

    def test_last_handle_extends_past_end(self):
        assert hit_test(WIDTHS, 442) == (4, True)

    def test_outside(self):
        assert hit_test(WIDTHS, 500) is None
        assert hit_test([], 5) is None


class TestResize:

    def test_drag_cycle(self):
        reducer = GridInteraction()
        assert reducer.handle(PointerDown(3, 320.0, True), WIDTHS) == [StartResize(3)]
        assert reducer.is_resizing
        assert reducer.handle(PointerMove(350.0), WIDTHS) == [DragResize(3, 30.0, 130.0)]
        assert reducer.handle(PointerUp(350.0), WIDTHS) == [EndResize(3)]
        assert not reducer.is_resizing

    def test_width_never_below_minimum(self):
        reducer = GridInteraction()
        reducer.handle(PointerDown(3, 320.0, True), WIDTHS)
        [intent] = reducer.handle(PointerMove(0.0), WIDTHS)
        assert intent.width == 20

    def test_width_relative_to_anchor(self):
        reducer = GridInteraction()
        reducer.handle(PointerDown(4, 440.0, True), WIDTHS)
        reducer.handle(PointerMove(460.0), WIDTHS)
        [intent] = reducer.handle(PointerMove(450.0), WIDTHS)
        assert intent.width == 130.0

    def test_move_and_up_ignored_when_idle(self):
        reducer = GridInteraction()
        assert reducer.handle(PointerMove(10.0), WIDTHS) == []
        assert reducer.handle(PointerUp(10.0), WIDTHS) == []

    def test_pointer_down_ignored_while_resizing(self):
        reducer = GridInteraction()
        reducer.handle(PointerDown(3, 320.0, True), WIDTHS)
        assert reducer.handle(PointerDown(4, 400.0, False), WIDTHS) == []
        assert reducer.drag.column == 3

    def test_cancel(self):
        reducer = GridInteraction()
        reducer.handle(PointerDown(3, 320.0, True), WIDTHS)
        reducer.cancel()
        assert reducer.handle(PointerMove(400.0), WIDTHS) == []

    def test_out_of_range_column_ignored(self):
        assert GridInteraction().handle(PointerDown(9, 5.0, True), WIDTHS) == []


class TestIntents:

    def test_click_away_from_handle_toggles_sort(self):
        assert GridInteraction().handle(PointerDown(3, 260.0, False), WIDTHS) == [ToggleSort(3)]

    def test_row_events(self):
        reducer = GridInteraction()
        field = FieldDescriptor("damage", ValueKind.INTEGER)
        record = object()
        assert reducer.handle(FieldEdited(record, field, 5), WIDTHS) == [EditField(record, field, 5)]
        assert reducer.handle(DuplicateClicked(record), WIDTHS) == [RequestDuplicate(record)]
        assert reducer.handle(DeleteClicked(record), WIDTHS) == [RequestDelete(record)]

    @pytest.mark.parametrize("event", [DuplicateClicked(None), DeleteClicked(None)])
    def test_row_events_do_not_touch_resize_state(self, event):
        reducer = GridInteraction()
        reducer.handle(PointerDown(3, 320.0, True), WIDTHS)
        reducer.handle(event, WIDTHS)
        assert reducer.is_resizing
