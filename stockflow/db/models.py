"""
All ORM models, importable from one place.

Importing this module registers every table on `Base.metadata`.
"""
from .company import Company
from .inventory import Inventory
from .product import Product
from .supplier import Supplier
from .warehouse import Warehouse

__all__ = ["Company", "Inventory", "Product", "Supplier", "Warehouse"]
