from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.orm import Session

from stockflow.core.config import Settings
from stockflow.db.database import Base, _enable_sqlite_foreign_keys
from stockflow.db.models import Company, Inventory, Product, Supplier, Warehouse
from stockflow.main import create_app


@pytest.fixture()
def db_file(tmp_path):
    return tmp_path / "stockflow_test.db"


@pytest.fixture()
def settings(db_file):
    return Settings(database_url=f"sqlite+aiosqlite:///{db_file}", database_echo=False, log_level="DEBUG")


@pytest.fixture()
def sync_engine(db_file):
    """Synchronous engine on the same SQLite file, for seeding and inspecting rows."""
    engine = create_engine(f"sqlite:///{db_file}")
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def client(settings, sync_engine):
    with TestClient(create_app(settings)) as c:
        yield c


def count_rows(engine, model) -> int:
    with Session(engine) as s:
        return s.execute(select(func.count()).select_from(model)).scalar_one()


@pytest.fixture()
def seed(sync_engine):
    """Insert rows directly; returns the ids of what was created."""

    def _seed(
        company_name="Company 1",
        warehouse_name="W1",
        supplier=("Acme", "a@acme.com"),
        products=(("Widget", "W-1", 5),),
        company_id=None,
    ):
        with Session(sync_engine) as s:
            if company_id is None:
                company = Company(name=company_name)
                s.add(company)
                s.flush()
                company_id = company.id
            warehouse = Warehouse(company_id=company_id, name=warehouse_name, location="Main street 1")
            s.add(warehouse)
            supplier_row = None
            if supplier is not None:
                supplier_row = Supplier(name=supplier[0], contact_email=supplier[1])
                s.add(supplier_row)
            s.flush()

            product_ids = {}
            for name, sku, quantity in products:
                p = Product(
                    name=name,
                    sku=sku,
                    price=Decimal("9.99"),
                    supplier_id=supplier_row.id if supplier_row else None,
                )
                s.add(p)
                s.flush()
                s.add(Inventory(product_id=p.id, warehouse_id=warehouse.id, quantity=quantity))
                product_ids[sku] = p.id
            s.commit()
            return {
                "company_id": company_id,
                "warehouse_id": warehouse.id,
                "supplier_id": supplier_row.id if supplier_row else None,
                "product_ids": product_ids,
            }

    return _seed
