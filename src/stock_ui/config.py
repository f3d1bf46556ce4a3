"""
Environment driven configuration for the Stock UI.

Every setting is read once at import time. Tests and alternative entry
points override behaviour by passing explicit arguments to the classes
that consume these values rather than by mutating the module.
"""

import os
import tempfile
from pathlib import Path

_TRUTHY = {"1", "true", "yes"}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Back end
API_URL = os.getenv("STOCK_UI_API_URL", "http://localhost:8080").rstrip("/")
SERVICE_KIND = os.getenv("STOCK_UI_SERVICE", "http").lower()
HTTP_TIMEOUT = float(os.getenv("STOCK_UI_HTTP_TIMEOUT", "15"))

# Lists
PAGE_SIZE = int(os.getenv("STOCK_UI_PAGE_SIZE", "10"))
DEBOUNCE_SECONDS = int(os.getenv("STOCK_UI_DEBOUNCE_MS", "500")) / 1000
CATALOGUE_LIMIT = 1000

# Durable token storage
CACHE_DIR = Path(
    os.getenv("STOCK_UI_CACHE_DIR", str(Path(tempfile.gettempdir()) / "stock_ui"))
)
TOKEN_KEY = "authToken"
TOKEN_TTL_SECONDS = int(os.getenv("STOCK_UI_TOKEN_TTL", str(24 * 60 * 60)))

# Live tab workspaces
WORKSPACE_LIMIT = int(os.getenv("STOCK_UI_MAX_TABS", "500"))
WORKSPACE_IDLE_SECONDS = int(os.getenv("STOCK_UI_TAB_IDLE", str(60 * 60)))

# App server
APP_PORT = int(os.getenv("STOCK_UI_PORT", "8000"))
USE_GENERIC_BRANDING = os.getenv("STOCK_UI_GENERIC", "false").lower() in _TRUTHY

APP_TITLE = "Inventory" if USE_GENERIC_BRANDING else "Controle de Estoque"
APP_SUBTITLE = "Manage products, clients and the stock allocated to them."
