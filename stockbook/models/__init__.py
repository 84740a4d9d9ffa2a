from stockbook.models.inventory import Expense, Item, Purchase, Sale, Season
from stockbook.models.user import User

__all__ = [
    "Expense",
    "Item",
    "Purchase",
    "Sale",
    "Season",
    "User",
]
