"""
StockFlow inventory API.

- Product provisioning (product + initial inventory row in one transaction)
- Low-stock alerts per company (single join across products/inventory/warehouses/suppliers)
"""

__version__ = "0.1.0"
