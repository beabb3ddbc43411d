"""Tests for asset_editor.core.column_layout and the SQLite settings backend."""

import pytest

from asset_editor.core.column_layout import (
    ColumnLayoutStore,
    format_widths,
    layout_key,
    parse_widths,
)
from asset_editor.core.errors import PersistedLayoutError
from asset_editor.core.schema_introspector import SchemaIntrospector, default_widths
from asset_editor.database.db_manager import EXPECTED_TABLES, SCHEMA_VERSION, DatabaseManager
from asset_editor.database.settings_repository import SettingsRepository

from sample_assets import BOW, POTION, WEAPON, Bow, Potion, Weapon


def _fields(record):
    return SchemaIntrospector().describe_fields(record)


class TestParseWidths:

    def test_round_trip_string(self):
        widths = [35.0, 35.0, 150.0, 123.5]
        assert parse_widths(format_widths(widths), 4) == widths

    def test_format_is_compact(self):
        assert format_widths([35, 150.0, 12.25]) == "35,150,12.25"

    @pytest.mark.parametrize("data", ["", "a,b", "35,,150", "35;150"])
    def test_unparsable(self, data):
        with pytest.raises(PersistedLayoutError):
            parse_widths(data, 2)

    def test_wrong_count(self):
        with pytest.raises(PersistedLayoutError):
            parse_widths("35,35,150", 4)

    @pytest.mark.parametrize("data", ["35,nan", "35,inf", "35,5"])
    def test_invalid_values(self, data):
        with pytest.raises(PersistedLayoutError):
            parse_widths(data, 2)


class TestColumnLayoutStore:

    def test_defaults_when_nothing_stored(self, settings):
        fields = _fields(Potion())
        assert ColumnLayoutStore(settings).load(POTION, fields) == default_widths(fields)

    def test_persist_and_reload_in_new_session(self, tmp_path):
        fields = _fields(Weapon())
        widths = default_widths(fields)
        widths[4] = 222.0

        db = DatabaseManager(tmp_path / "layout.db")
        db.initialize_database()
        ColumnLayoutStore(SettingsRepository(db)).save(WEAPON, widths)
        db.close()

        db = DatabaseManager(tmp_path / "layout.db")
        db.initialize_database()
        assert ColumnLayoutStore(SettingsRepository(db)).load(WEAPON, fields) == widths
        db.close()

    def test_field_count_change_regenerates_defaults(self, settings):
        layouts = ColumnLayoutStore(settings)
        weapon_fields = _fields(Weapon())
        layouts.save(BOW, [40.0] * (3 + len(weapon_fields)))
        bow_fields = _fields(Bow())
        assert layouts.load(BOW, bow_fields) == default_widths(bow_fields)

    def test_malformed_entry_regenerates_defaults(self, settings):
        settings.set(layout_key(POTION), "garbage")
        fields = _fields(Potion())
        assert ColumnLayoutStore(settings).load(POTION, fields) == default_widths(fields)

    def test_layouts_are_per_type(self, settings):
        layouts = ColumnLayoutStore(settings)
        potion_fields = _fields(Potion())
        layouts.save(POTION, [50.0, 50.0, 200.0, 120.0, 130.0])
        weapon_fields = _fields(Weapon())
        assert layouts.load(WEAPON, weapon_fields) == default_widths(weapon_fields)
        assert layouts.load(POTION, potion_fields) == [50.0, 50.0, 200.0, 120.0, 130.0]

    def test_reset_restores_defaults(self, settings):
        layouts = ColumnLayoutStore(settings)
        fields = _fields(Potion())
        layouts.save(POTION, [50.0, 50.0, 200.0, 120.0, 130.0])
        layouts.reset(POTION)
        assert layouts.load(POTION, fields) == default_widths(fields)
        assert settings.get(layout_key(POTION)) is None

    def test_key_uses_qualified_id(self):
        assert layout_key(WEAPON) == "column_widths/sample_assets:Weapon"


class TestSettingsRepository:

    def test_tables_created(self, tmp_path):
        db = DatabaseManager(tmp_path / "s.db")
        db.initialize_database()
        assert set(EXPECTED_TABLES) <= set(db.get_tables())
        assert db.schema_version == SCHEMA_VERSION
        db.close()

    def test_initialize_is_idempotent(self, tmp_path):
        db = DatabaseManager(tmp_path / "s.db")
        db.initialize_database()
        SettingsRepository(db).set("k", "v")
        db.initialize_database()
        assert SettingsRepository(db).get("k") == "v"
        db.close()

    def test_get_default(self, settings):
        assert settings.get("missing") is None
        assert settings.get("missing", "x") == "x"

    def test_upsert(self, settings):
        settings.set("scope_path", "Assets")
        settings.set("scope_path", "Assets/Weapons")
        assert settings.get("scope_path") == "Assets/Weapons"

    def test_bool_round_trip(self, settings):
        assert settings.get_bool("include_derived", True) is True
        settings.set_bool("include_derived", False)
        assert settings.get_bool("include_derived", True) is False

    def test_delete(self, settings):
        settings.set("k", "v")
        settings.delete("k")
        assert settings.get("k") is None
