import re
from zoneinfo import ZoneInfo

KW_TZ = ZoneInfo("Asia/Kuwait")

CURRENCY_CODE = "KWD"
CURRENCY_DECIMALS = 3

# Half a fils: tolerance when comparing a stored total with its recomputation.
TOTAL_TOLERANCE = 0.0005

ITEM_ID_MAX_LENGTH = 100
ITEM_ID_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

UNKNOWN_PROFIT_LABEL = "-"
