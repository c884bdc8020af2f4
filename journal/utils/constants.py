"""Shared constants for trade metrics and export."""

# Pip size per instrument family; pairs quoted in yen move in hundredths
PIP_UNIT = 0.0001
JPY_PIP_UNIT = 0.01
JPY_MARKER = "JPY"

# Profit factor reported when there are winning pips but no losing pips
PROFIT_FACTOR_NO_LOSSES = 999.0

STARTING_EQUITY = 1000.0
EQUITY_PER_PIP = 10.0
EQUITY_START_LABEL = "Start"
EQUITY_START_TRADE = "Initial"

CSV_HEADERS = [
    "Date",
    "Pair",
    "Type",
    "Entry",
    "Stop Loss",
    "Take Profit",
    "Result",
    "Pips",
    "Risk:Reward",
    "Notes",
]
EXPORT_FILENAME_PREFIX = "trading-journal"
EXPORT_PREVIEW_SIZE = 5

ALLOWED_SCREENSHOT_TYPES: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
}
