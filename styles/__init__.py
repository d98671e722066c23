"""Shared style constants for Neural Waves."""

COLORS = {
    "primary": "#5b8def",
    "highlight": "#9ab8ff",
    "heart": "#e0445b",
    "background": "#11131a",
    "surface": "#1c2030",
    "muted": "#8a8fa3",
    "dim": "#555a6e",
    "inactive": "#2e3347",
}

COLOR_PRIMARY = COLORS["primary"]
COLOR_HIGHLIGHT = COLORS["highlight"]
COLOR_HEART = COLORS["heart"]
COLOR_BACKGROUND = COLORS["background"]
COLOR_SURFACE = COLORS["surface"]
COLOR_MUTED = COLORS["muted"]
COLOR_DIM = COLORS["dim"]
COLOR_INACTIVE = COLORS["inactive"]
