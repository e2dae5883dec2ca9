from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import INT32_MAX, INT32_MIN, LOW_STOCK_THRESHOLD
from ..core.errors import PersistenceError
from ..core.logging import get_logger
from ..db.database import get_async_session
from ..db.models import (
    Inventory as InventoryModel,
    Product as ProductModel,
    Supplier as SupplierModel,
    Warehouse as WarehouseModel,
)
from ..schemas.alerts import LowStockAlert, LowStockResponse

router = APIRouter()
logger = get_logger(__name__)


async def load_low_stock_alerts(db: AsyncSession, company_id: int) -> List[LowStockAlert]:
    """
    Low-stock rows for every warehouse owned by `company_id`, in one query.

    - products -> inventory -> warehouses are inner joins (a stock row is required)
    - suppliers is an outer join so unsupplied products still alert (supplier=None)
    """
    stmt = (
        select(ProductModel, InventoryModel, WarehouseModel, SupplierModel)
        .join(InventoryModel, InventoryModel.product_id == ProductModel.id)
        .join(WarehouseModel, InventoryModel.warehouse_id == WarehouseModel.id)
        .outerjoin(SupplierModel, ProductModel.supplier_id == SupplierModel.id)
        .where(WarehouseModel.company_id == company_id)
        .where(InventoryModel.quantity < LOW_STOCK_THRESHOLD)
        .order_by(func.lower(ProductModel.name).asc(), ProductModel.id.asc(), WarehouseModel.id.asc())
    )
    res = await db.execute(stmt)

    alerts: List[LowStockAlert] = []
    for product, inv, warehouse, supplier in res.all():
        alerts.append(
            LowStockAlert(
                product_id=product.id,
                product_name=product.name,
                sku=product.sku,
                warehouse_name=warehouse.name,
                current_stock=int(inv.quantity),
                supplier=supplier.to_schema if supplier else None,
            )
        )
    return alerts


@router.get("/{company_id}/alerts/low-stock", response_model=LowStockResponse)
async def get_low_stock_alerts(
    company_id: int = Path(ge=INT32_MIN, le=INT32_MAX),
    db: AsyncSession = Depends(get_async_session),
):
    try:
        alerts = await load_low_stock_alerts(db, company_id)
    except Exception as e:
        logger.exception("low-stock query failed company_id=%s", company_id)
        raise PersistenceError("Server Error") from e
    return LowStockResponse(alerts=alerts, total_alerts=len(alerts))
