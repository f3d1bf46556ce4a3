"""
Stock UI: a Reflex application for managing products, clients and the
stock allocated to each client.

The pages talk to a REST back end through a StockService; an in-memory
demo service serves the same contract for local runs and tests.

Subpackages:
- components: Reflex page bodies and shared widgets
- controllers: list, detail and transfer logic behind the pages
- models: immutable domain records and their Reflex copies
- services: data access layer (HTTP and demo implementations)
- data: demo fixtures
- lib: logging and disk cache helpers

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
