"""Chargily Pay API endpoints."""

CHARGILY_LIVE_URL = "https://pay.chargily.net/api/v2"
CHARGILY_TEST_URL = "https://pay.chargily.net/test/api/v2"

MODES = ("test", "live")
DEFAULT_PER_PAGE = 10
