"""Reflex configuration for the Stock UI application."""

import os

import reflex as rx

# Get port from environment
APP_PORT = int(os.getenv("STOCK_UI_PORT", "8000"))

config = rx.Config(
    app_name="stock_ui",
    # Use the src directory structure
    app_module_import="stock_ui.app",
    frontend_port=APP_PORT,
)
