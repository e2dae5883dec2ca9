from typing import List, Optional

from pydantic import BaseModel


class SupplierContact(BaseModel):
    name: str
    contact_email: str


class LowStockAlert(BaseModel):
    product_id: int
    product_name: str
    sku: str
    warehouse_name: str
    current_stock: int
    supplier: Optional[SupplierContact] = None


class LowStockResponse(BaseModel):
    alerts: List[LowStockAlert]
    total_alerts: int
