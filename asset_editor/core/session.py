"""Editor session — per-window state shared by the grid components."""

from __future__ import annotations

from dataclasses import dataclass, field

from asset_editor.constants import (
    ALL_MODULES,
    DEFAULT_SCOPE_PATH,
    MAX_CREATE_COUNT,
    MIN_CREATE_COUNT,
)
from asset_editor.models.asset import TypeDescriptor
from asset_editor.models.grid import SearchFilter, SortState


@dataclass
class EditorSession:
    """State of one open editor window.

    Attributes:
        scope_path: Asset folder searched for records.
        module_filter: Selected source module, or ``ALL_MODULES``.
        types: Selectable types (recomputed on refresh/filter/scope change).
        selected_type_index: Index into *types* (-1 = none).
        search: Type/instance filters and include-derived flag.
        sort: Active sort state.
        create_count: Number of instances the add action creates.
    """
    scope_path: str = DEFAULT_SCOPE_PATH
    module_filter: str = ALL_MODULES
    types: list[TypeDescriptor] = field(default_factory=list)
    selected_type_index: int = -1
    search: SearchFilter = field(default_factory=SearchFilter)
    sort: SortState = field(default_factory=SortState)
    create_count: int = MIN_CREATE_COUNT

    @property
    def selected_type(self) -> TypeDescriptor | None:
        if 0 <= self.selected_type_index < len(self.types):
            return self.types[self.selected_type_index]
        return None

    def set_types(self, types: list[TypeDescriptor]) -> None:
        """Replace the type list, keeping the selection in range."""
        previous = self.selected_type
        self.types = list(types)
        if previous is not None and previous in self.types:
            self.selected_type_index = self.types.index(previous)
        elif self.types:
            self.selected_type_index = min(max(self.selected_type_index, 0), len(self.types) - 1)
        else:
            self.selected_type_index = -1

    def set_create_count(self, count: int) -> int:
        self.create_count = min(MAX_CREATE_COUNT, max(MIN_CREATE_COUNT, int(count)))
        return self.create_count
