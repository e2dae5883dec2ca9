from typing import Dict

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.config import INT32_MAX, INT32_MIN
from ..core.errors import ConflictError, NotFoundError, PersistenceError
from ..core.logging import get_logger
from ..db.database import get_async_session
from ..db.models import Inventory as InventoryModel, Product as ProductModel
from ..schemas.products import ProductCreate, ProductCreated, ProductRead

router = APIRouter()
logger = get_logger(__name__)


async def _sku_exists(db: AsyncSession, sku: str) -> bool:
    res = await db.execute(select(ProductModel.id).where(ProductModel.sku == sku))
    return res.scalar_one_or_none() is not None


async def provision_product(db: AsyncSession, payload: ProductCreate) -> ProductModel:
    """
    Create a product and its initial inventory row as one unit of work.

    `db.begin()` commits when the block exits normally and rolls back on any
    exception, so a failed inventory insert also discards the product insert.
    Raises ConflictError for a duplicate sku, PersistenceError for any other
    failure inside the transaction.
    """
    try:
        async with db.begin():
            product = ProductModel(
                name=payload.name,
                sku=payload.sku,
                price=payload.price,
                supplier_id=payload.supplier_id,
            )
            db.add(product)
            await db.flush()  # assigns product.id

            db.add(
                InventoryModel(
                    product_id=product.id,
                    warehouse_id=payload.warehouse_id,
                    quantity=payload.initial_quantity,
                )
            )
            await db.flush()
    except IntegrityError as e:
        # The transaction is already rolled back here. A concurrent winner with the
        # same sku is committed (and visible) by the time our insert fails.
        try:
            duplicate = await _sku_exists(db, payload.sku)
        except SQLAlchemyError:
            logger.exception("sku lookup after failed provisioning failed sku=%s", payload.sku)
            duplicate = False
        finally:
            await db.rollback()
        if duplicate:
            logger.warning(
                "provisioning conflict: sku already exists sku=%s warehouse_id=%s",
                payload.sku,
                payload.warehouse_id,
                exc_info=e,
            )
            raise ConflictError("A product with this SKU already exists") from e
        logger.exception(
            "provisioning failed on constraint sku=%s warehouse_id=%s supplier_id=%s",
            payload.sku,
            payload.warehouse_id,
            payload.supplier_id,
        )
        raise PersistenceError("Failed to create product") from e
    except Exception as e:
        logger.exception("provisioning failed sku=%s warehouse_id=%s", payload.sku, payload.warehouse_id)
        raise PersistenceError("Failed to create product") from e

    logger.info(
        "product provisioned id=%s sku=%s warehouse_id=%s quantity=%s",
        product.id,
        product.sku,
        payload.warehouse_id,
        payload.initial_quantity,
    )
    return product


@router.post("", response_model=ProductCreated, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_async_session),
):
    product = await provision_product(db, payload)
    return ProductCreated(message="Product created successfully", product_id=product.id)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: int = Path(ge=INT32_MIN, le=INT32_MAX),
    db: AsyncSession = Depends(get_async_session),
):
    res = await db.execute(
        select(ProductModel)
        .options(selectinload(ProductModel.inventory))
        .where(ProductModel.id == product_id)
    )
    m = res.scalar_one_or_none()
    if not m:
        raise NotFoundError("Product not found")

    inventory: list[Dict] = [
        {"warehouse_id": inv.warehouse_id, "quantity": int(inv.quantity)}
        for inv in sorted(m.inventory, key=lambda inv: inv.warehouse_id)
    ]
    return ProductRead(
        id=m.id,
        name=m.name,
        sku=m.sku,
        price=m.price,
        supplier_id=m.supplier_id,
        inventory=inventory,
    )
