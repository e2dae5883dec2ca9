"""
Seed a demo company with one low-stock product.

Run locally:
  python -m stockflow.scripts.seed_demo

It uses the same DATABASE_URL env var as the API (dotenv supported by core.config).
Safe to run repeatedly: rows are looked up by name/sku before being created.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select

from ..core.config import Settings
from ..core.logging import configure_logging, get_logger
from ..db.database import create_db_and_tables, create_engine_and_session_maker
from ..db.models import Company, Inventory, Product, Supplier, Warehouse

logger = get_logger(__name__)


@dataclass(frozen=True)
class SeedProduct:
    name: str
    sku: str
    price: Decimal
    quantity: int


COMPANY_NAME = "Demo Company"
WAREHOUSE_NAME = "W1"
SUPPLIER_NAME = "Acme"
SUPPLIER_EMAIL = "a@acme.com"

SEED_PRODUCTS: list[SeedProduct] = [
    SeedProduct(name="Widget", sku="W-1", price=Decimal("9.99"), quantity=5),
    SeedProduct(name="Gadget", sku="G-1", price=Decimal("24.50"), quantity=120),
]


async def _get_or_create_company(db, name: str) -> tuple[Company, bool]:
    res = await db.execute(select(Company).where(func.lower(Company.name) == name.lower()))
    company: Optional[Company] = res.scalar_one_or_none()
    if company:
        return company, False
    company = Company(name=name)
    db.add(company)
    await db.flush()
    return company, True


async def main(settings: Optional[Settings] = None) -> dict:
    settings = settings or Settings()
    configure_logging(settings.log_level)
    engine, session_maker = create_engine_and_session_maker(settings)
    await create_db_and_tables(engine)

    created = {"companies": 0, "warehouses": 0, "suppliers": 0, "products": 0}
    try:
        async with session_maker() as db:
            async with db.begin():
                company, is_new = await _get_or_create_company(db, COMPANY_NAME)
                created["companies"] += int(is_new)

                res = await db.execute(
                    select(Warehouse).where(Warehouse.company_id == company.id, Warehouse.name == WAREHOUSE_NAME)
                )
                warehouse = res.scalar_one_or_none()
                if not warehouse:
                    warehouse = Warehouse(company_id=company.id, name=WAREHOUSE_NAME, location="Main street 1")
                    db.add(warehouse)
                    await db.flush()
                    created["warehouses"] += 1

                res = await db.execute(select(Supplier).where(func.lower(Supplier.name) == SUPPLIER_NAME.lower()))
                supplier = res.scalar_one_or_none()
                if not supplier:
                    supplier = Supplier(name=SUPPLIER_NAME, contact_email=SUPPLIER_EMAIL)
                    db.add(supplier)
                    await db.flush()
                    created["suppliers"] += 1

                for p in SEED_PRODUCTS:
                    res = await db.execute(select(Product).where(Product.sku == p.sku))
                    if res.scalar_one_or_none():
                        continue
                    product = Product(name=p.name, sku=p.sku, price=p.price, supplier_id=supplier.id)
                    db.add(product)
                    await db.flush()
                    db.add(Inventory(product_id=product.id, warehouse_id=warehouse.id, quantity=p.quantity))
                    created["products"] += 1
    finally:
        await engine.dispose()

    logger.info(
        "seed done: companies=%s warehouses=%s suppliers=%s products=%s",
        created["companies"],
        created["warehouses"],
        created["suppliers"],
        created["products"],
    )
    return created


if __name__ == "__main__":
    asyncio.run(main())
