"""Grid controller — central mediator between the asset store and the grid UI.

Owns the editor session, the working set and the column layout. All user
actions go through this controller, which emits Qt signals so the header,
rows and stats stay in sync.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Any, Callable

from PyQt6.QtCore import QObject, pyqtSignal

from asset_editor.constants import ALL_MODULES, DEFAULT_SCOPE_PATH
from asset_editor.core import sort_engine
from asset_editor.core.column_layout import ColumnLayoutStore, PreferenceStore
from asset_editor.core.editor_selection import coerce_edit, select_editor
from asset_editor.core.errors import PathError, StoreError
from asset_editor.core.grid_state import (
    DragResize,
    EditField,
    EndResize,
    GridEvent,
    GridInteraction,
    Intent,
    RequestDelete,
    RequestDuplicate,
    StartResize,
    ToggleSort,
)
from asset_editor.core.memory import measure_size
from asset_editor.core.object_set import ObjectSet
from asset_editor.core.path_namer import unique_path
from asset_editor.core.schema_introspector import (
    SchemaIntrospector,
    build_columns,
    default_widths,
)
from asset_editor.core.session import EditorSession
from asset_editor.core.type_catalog import TypeCatalog
from asset_editor.models.asset import Asset, FieldDescriptor, TypeDescriptor
from asset_editor.models.grid import Column, SortState
from asset_editor.store.asset_store import FileAssetStore
from asset_editor.store.reflection import DataclassReflection

logger = logging.getLogger(__name__)


class GridController(QObject):
    """Mediator between FileAssetStore and the property grid views.

    Signals:
        types_changed: Module/type lists were recomputed.
        records_changed: Working set reloaded or re-sorted.
        columns_changed: Column schema or the whole layout changed.
        width_changed(int): One column width changed during a drag.
        sort_changed: Sort column or direction changed.
        record_edited(object): A field of this record was written.
    """

    types_changed = pyqtSignal()
    records_changed = pyqtSignal()
    columns_changed = pyqtSignal()
    width_changed = pyqtSignal(int)
    sort_changed = pyqtSignal()
    record_edited = pyqtSignal(object)

    def __init__(
        self,
        store: FileAssetStore,
        prefs: PreferenceStore,
        session: EditorSession | None = None,
        size_of: Callable[[Any], int] = measure_size,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._store = store
        self._session = session or EditorSession()
        self._introspector = SchemaIntrospector()
        self._layouts = ColumnLayoutStore(prefs)
        self._catalog = TypeCatalog(store)
        self._objects = ObjectSet(store, size_of)
        self._interaction = GridInteraction()
        self._modules: list[str] = []
        self._fields: list[FieldDescriptor] = []
        self._widths: list[float] = []
        self._layout_type: TypeDescriptor | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def session(self) -> EditorSession:
        return self._session

    @property
    def store(self) -> FileAssetStore:
        return self._store

    @property
    def object_set(self) -> ObjectSet:
        return self._objects

    @property
    def interaction(self) -> GridInteraction:
        return self._interaction

    @property
    def reflection(self) -> DataclassReflection:
        return self._introspector.reflection

    @property
    def modules(self) -> list[str]:
        """Module selector entries, ``ALL_MODULES`` first."""
        return [ALL_MODULES, *self._modules]

    @property
    def fields(self) -> list[FieldDescriptor]:
        return list(self._fields)

    @property
    def widths(self) -> list[float]:
        return list(self._widths)

    @property
    def columns(self) -> list[Column]:
        return build_columns(self._fields, self._widths)

    @property
    def records(self) -> list[Asset]:
        return self._objects.records

    # ------------------------------------------------------------------
    # Session changes
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Recompute modules and types, then reload the working set."""
        self._introspector.clear()
        if not self._is_valid_scope(self._session.scope_path):
            logger.warning("Scope %r is outside the project; using %r",
                           self._session.scope_path, DEFAULT_SCOPE_PATH)
            self._session.scope_path = DEFAULT_SCOPE_PATH
        scope = self._session.scope_path
        self._modules = self._catalog.available_modules(scope)
        if self._session.module_filter not in self._modules:
            self._session.module_filter = ALL_MODULES
        self._session.set_types(self._catalog.discover_types(
            scope, self._session.module_filter, self._session.search.type_filter,
        ))
        self.types_changed.emit()
        self.reload_records()

    def set_scope_path(self, path: str) -> bool:
        """Switch to *path* and refresh.

        Returns:
            False, leaving the current scope in place, when *path* is
            absolute or leaves the project root.
        """
        scope = path.strip().rstrip("/")
        if not self._is_valid_scope(scope):
            logger.warning("Rejected scope path %r", path)
            return False
        self._session.scope_path = scope
        self.refresh()
        return True

    def _is_valid_scope(self, scope: str) -> bool:
        try:
            self._store.check_path(scope)
        except StoreError:
            return False
        return True

    def set_module_filter(self, module: str) -> None:
        self._session.module_filter = module
        self.refresh()

    def set_type_filter(self, text: str) -> None:
        self._session.search.type_filter = text
        self.refresh()

    def select_type(self, index: int) -> None:
        if index == self._session.selected_type_index:
            return
        self._session.selected_type_index = index
        self.reload_records()

    def set_instance_filter(self, text: str) -> None:
        self._session.search.instance_filter = text
        self.reload_records()

    def set_include_derived(self, enabled: bool) -> None:
        self._session.search.include_derived = enabled
        self.reload_records()

    # ------------------------------------------------------------------
    # Working set
    # ------------------------------------------------------------------

    def reload_records(self) -> None:
        """Reload the working set and re-derive columns and widths."""
        type_desc = self._session.selected_type
        self._objects.reload(self._session.scope_path, type_desc, self._session.search)

        fields = self._introspector.describe_fields(self._objects.representative(type_desc))
        schema_changed = fields != self._fields or type_desc != self._layout_type
        self._fields = fields
        if schema_changed or len(self._widths) != len(fields) + 3:
            self._interaction.cancel()
            self._widths = (
                self._layouts.load(type_desc, fields) if type_desc is not None
                else default_widths(fields)
            )
            self._layout_type = type_desc

        if self._session.sort.column is not None and self._session.sort.column >= len(self._widths):
            self._session.sort = SortState()
            self.sort_changed.emit()

        self._objects.resort(self._session.sort, self._fields)
        if schema_changed:
            self.columns_changed.emit()
        self.records_changed.emit()

    def default_create_folder(self) -> str:
        """Folder of the first listed record, else the scope path."""
        records = self._objects.records
        if records and records[0].asset_path:
            folder = posixpath.dirname(records[0].asset_path)
            if folder:
                return folder
        return self._session.scope_path

    def create_instances(self, base_path: str, count: int | None = None) -> list[str]:
        """Create *count* default records of the selected type.

        The first goes to *base_path* when free, the rest to host-style
        ``Name 1``, ``Name 2`` paths next to it.
        """
        type_desc = self._session.selected_type
        if type_desc is None or not base_path:
            return []
        n = self._session.set_create_count(count if count is not None else self._session.create_count)
        created = []
        for _ in range(n):
            try:
                path = self._store.unique_available_path(base_path)
                self._store.create(type_desc, path)
            except (PathError, StoreError):
                logger.warning("Could not create %s at %s", type_desc.name, base_path, exc_info=True)
                break
            created.append(path)
        self.reload_records()
        return created

    def reset_column_widths(self) -> None:
        type_desc = self._session.selected_type
        if type_desc is None:
            return
        self._layouts.reset(type_desc)
        self._interaction.cancel()
        self._widths = self._layouts.load(type_desc, self._fields)
        self.columns_changed.emit()

    # ------------------------------------------------------------------
    # Event reduction
    # ------------------------------------------------------------------

    def handle_event(self, event: GridEvent) -> list[Intent]:
        """Feed a primitive event through the reducer and apply its intents."""
        intents = self._interaction.handle(event, self._widths)
        for intent in intents:
            self.apply(intent)
        return intents

    def apply(self, intent: Intent) -> None:
        if isinstance(intent, StartResize):
            return
        if isinstance(intent, DragResize):
            self._widths[intent.column] = intent.width
            self.width_changed.emit(intent.column)
        elif isinstance(intent, EndResize):
            self._save_layout()
        elif isinstance(intent, ToggleSort):
            self._toggle_sort(intent.column)
        elif isinstance(intent, EditField):
            self.edit_field(intent.record, intent.field, intent.value)
        elif isinstance(intent, RequestDuplicate):
            self.duplicate_record(intent.record)
        elif isinstance(intent, RequestDelete):
            self.delete_record(intent.record)

    def _save_layout(self) -> None:
        type_desc = self._session.selected_type
        if type_desc is not None:
            self._layouts.save(type_desc, self._widths)

    def _toggle_sort(self, column: int) -> None:
        new_state = sort_engine.toggle(self._session.sort, column, len(self._widths))
        if new_state == self._session.sort:
            return
        self._session.sort = new_state
        self._objects.resort(new_state, self._fields)
        self.sort_changed.emit()
        self.records_changed.emit()

    # ------------------------------------------------------------------
    # Record intents
    # ------------------------------------------------------------------

    def edit_field(self, record: Asset, field: FieldDescriptor, value: Any) -> bool:
        """Write *value* into *record* immediately and persist it.

        Returns:
            True when the in-memory record now holds the new value.
        """
        reflection = self._introspector.reflection
        try:
            value = coerce_edit(select_editor(field), value)
            reflection.set_field(record, field.name, value)
        except (KeyError, TypeError, ValueError):
            logger.warning("Rejected edit of %s.%s", record.name, field.name, exc_info=True)
            return False
        try:
            self._store.save(record)
        except StoreError:
            logger.warning("Could not save %s", record.name, exc_info=True)
        self.record_edited.emit(record)
        return True

    def duplicate_record(self, record: Asset) -> str | None:
        """Copy *record* next to itself under a collision-free name."""
        try:
            new_path = unique_path(self._store.path_of(record), self._store.exists)
            self._store.duplicate_at(record, new_path)
        except (PathError, StoreError):
            logger.warning("Could not duplicate %s", record.name, exc_info=True)
            return None
        self.reload_records()
        return new_path

    def delete_record(self, record: Asset) -> bool:
        try:
            self._store.delete(self._store.path_of(record))
        except StoreError:
            logger.warning("Could not delete %s", record.name, exc_info=True)
            return False
        self.reload_records()
        return True

    def reference_options(self, target: type) -> list[Asset]:
        """Records under the scope assignable to a *target* reference."""
        options = []
        for path in self._store.find_records(self._session.scope_path, target):
            try:
                options.append(self._store.load(path))
            except StoreError:
                logger.warning("Skipping unreadable asset %s", path, exc_info=True)
        return options

