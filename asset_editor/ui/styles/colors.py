"""Color palette constants for the dark theme."""

# Base theme colors
BACKGROUND = "#0F172A"
PANEL_BG = "#1E293B"
SURFACE = "#334155"
BORDER = "#475569"

# Accent colors
ACCENT = "#3B82F6"
ACCENT_HOVER = "#60A5FA"

# Semantic colors
ERROR = "#EF4444"

# Text colors
TEXT_PRIMARY = "#F8FAFC"
TEXT_SECONDARY = "#B0BEC5"

# Grid
HEADER_BG = "#273449"
HEADER_ACTIVE_BG = "#2F3F59"   # sorted column
RESIZE_HANDLE = "#64748B"
ROW_ALT_BG = "#182235"
