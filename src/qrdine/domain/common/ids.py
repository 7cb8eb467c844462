from __future__ import annotations

from typing import NewType

MenuItemId = NewType("MenuItemId", str)
OrderId = NewType("OrderId", str)
TableId = NewType("TableId", str)
TransactionId = NewType("TransactionId", str)
