"""
Framework independent view controllers.

- ListController: paginated, debounced, latest-wins list of products or clients
- DetailController: client plus stock lines loaded as one unit
- TransferWorkflow: stock transfer that refreshes the detail view
"""

from stock_ui.controllers.detail_controller import (
    DetailController,
    DetailState,
    TransferState,
    TransferWorkflow,
)
from stock_ui.controllers.list_controller import ListController, ListState
from stock_ui.controllers.observable import Observable
from stock_ui.controllers.sources import ClientSource, ListSource, ProductSource

__all__ = [
    "ClientSource",
    "DetailController",
    "DetailState",
    "ListController",
    "ListSource",
    "ListState",
    "Observable",
    "ProductSource",
    "TransferState",
    "TransferWorkflow",
]
