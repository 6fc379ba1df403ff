"""
constants.py — shared constants used across the pipeline and API.

Island names, ordinal levels and the industry icon/colour palettes live
here so the importer defaults, the API validation and the CSV templates
stay in sync.
"""

from __future__ import annotations

from typing import Final, Literal

# ---------------------------------------------------------------------------
# Geography
# ---------------------------------------------------------------------------
ISLANDS: Final[list[str]] = [
    "Oahu",
    "Maui",
    "Big Island",
    "Kauai",
    "Molokai",
    "Lanai",
]

# ---------------------------------------------------------------------------
# Ordinals and enumerations
# ---------------------------------------------------------------------------
LEVELS: Final[list[str]] = ["Low", "Medium", "High"]

COMPANY_SIZES: Final[list[str]] = [
    "Small (1-50)",
    "Medium (51-200)",
    "Large (201+)",
]

EVENT_TYPES: Final[list[str]] = ["company", "htw"]

# ---------------------------------------------------------------------------
# Industry presentation
# ---------------------------------------------------------------------------
INDUSTRY_ICONS: Final[dict[str, str]] = {
    "🏨": "Hotel/Tourism",
    "🏥": "Healthcare",
    "💻": "Technology",
    "💰": "Finance",
    "🎓": "Education",
    "🏛️": "Government",
    "🏠": "Real Estate",
    "🛍️": "Retail",
    "🌾": "Agriculture",
    "🚛": "Transportation",
    "⚡": "Energy",
    "🏭": "Manufacturing",
    "🎬": "Media",
    "🔨": "Construction",
    "❤️": "Non-Profit",
    "🏢": "Other",
}

INDUSTRY_COLORS: Final[list[str]] = [
    "#FF8A65", "#4CAF50", "#1E88E5", "#9C27B0", "#FF9800",
    "#795548", "#607D8B", "#E91E63", "#8BC34A", "#03A9F4",
    "#FFC107", "#673AB7", "#F44336", "#FF5722", "#2196F3",
]

DEFAULT_ICON: Final[str] = "🏢"
DEFAULT_COLOR: Final[str] = INDUSTRY_COLORS[0]
DEFAULT_LEVEL: Final[str] = "Medium"
DEFAULT_COMPANY_SIZE: Final[str] = COMPANY_SIZES[0]
DEFAULT_EVENT_TYPE: Final[str] = "htw"

# ---------------------------------------------------------------------------
# Typed literals
# ---------------------------------------------------------------------------
Island = Literal["Oahu", "Maui", "Big Island", "Kauai", "Molokai", "Lanai"]
EventType = Literal["company", "htw"]
Timeframe = Literal["monthly", "quarterly", "yearly"]
RecordType = Literal["industries", "companies", "members", "events"]
ImportStatus = Literal["success", "failure"]

# Months looked back from "now" for each dashboard timeframe
TIMEFRAME_MONTHS: Final[dict[str, int]] = {
    "monthly": 1,
    "quarterly": 3,
    "yearly": 12,
}
