"""Application-wide constants."""

APP_NAME = "Asset Grid Editor"
APP_VERSION = "0.1.0"
APP_ORGANIZATION = "AssetGrid"

# Window constraints
MIN_WINDOW_WIDTH = 960
MIN_WINDOW_HEIGHT = 600

# Asset storage
DEFAULT_SCOPE_PATH = "Assets"
ASSET_EXTENSION = ".asset"
COPY_SUFFIX = "_Copy"

# Database
DB_FILENAME = "asset_editor.db"

# Settings keys (app_settings table)
SETTING_SCOPE_PATH = "scope_path"
SETTING_INCLUDE_DERIVED = "include_derived"
COLUMN_WIDTHS_KEY_PREFIX = "column_widths/"

# Module selector
ALL_MODULES = "All Modules"

# Grid columns [px]
DUPLICATE_COLUMN_WIDTH = 35
DELETE_COLUMN_WIDTH = 35
NAME_COLUMN_WIDTH = 150
MIN_FIELD_COLUMN_WIDTH = 100
FIELD_WIDTH_PER_CHAR = 10
MIN_COLUMN_WIDTH = 20
RESIZE_HANDLE_WIDTH = 8
HEADER_HEIGHT = 22
ROW_HEIGHT = 22
TEXT_AREA_LINE_HEIGHT = 14

# Add-N action
MIN_CREATE_COUNT = 1
MAX_CREATE_COUNT = 100

# Slider resolution for float ranges
FLOAT_SLIDER_STEPS = 1000
