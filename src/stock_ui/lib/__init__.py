"""
Local library modules shared across the Stock UI.

Modules:
    logs: Logging utilities
    caches: Disk-backed key-value storage
"""

from stock_ui.lib import caches, logs

__all__ = ["caches", "logs"]
