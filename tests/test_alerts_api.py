"""Integration tests for GET /companies/{company_id}/alerts/low-stock."""

from stockflow.core.config import LOW_STOCK_THRESHOLD


def _alerts(client, company_id):
    response = client.get(f"/companies/{company_id}/alerts/low-stock")
    assert response.status_code == 200
    return response.json()


class TestLowStockAlerts:
    def test_widget_scenario(self, client, seed):
        ids = seed()

        body = _alerts(client, ids["company_id"])

        assert body["total_alerts"] == 1
        alert = body["alerts"][0]
        assert alert == {
            "product_id": ids["product_ids"]["W-1"],
            "product_name": "Widget",
            "sku": "W-1",
            "warehouse_name": "W1",
            "current_stock": 5,
            "supplier": {"name": "Acme", "contact_email": "a@acme.com"},
        }

        conflict = client.post(
            "/products",
            json={"name": "Widget2", "sku": "W-1", "price": 9.99, "warehouse_id": ids["warehouse_id"]},
        )
        assert conflict.status_code == 409
        assert _alerts(client, ids["company_id"])["total_alerts"] == 1

    def test_threshold_is_strict(self, client, seed):
        ids = seed(
            products=(
                ("At threshold", "T-20", LOW_STOCK_THRESHOLD),
                ("Just below", "T-19", LOW_STOCK_THRESHOLD - 1),
                ("Plenty", "T-500", 500),
                ("Empty", "T-0", 0),
            )
        )

        body = _alerts(client, ids["company_id"])

        skus = sorted(a["sku"] for a in body["alerts"])
        assert skus == ["T-0", "T-19"]
        assert all(a["current_stock"] < LOW_STOCK_THRESHOLD for a in body["alerts"])
        assert body["total_alerts"] == 2

    def test_only_the_requested_company(self, client, seed):
        ours = seed(company_name="Ours", products=(("Ours low", "O-1", 3),))
        seed(company_name="Theirs", warehouse_name="T1", supplier=("Other", "o@other.com"), products=(("Theirs low", "X-1", 1),))

        body = _alerts(client, ours["company_id"])

        assert [a["sku"] for a in body["alerts"]] == ["O-1"]

    def test_all_warehouses_of_the_company(self, client, seed):
        first = seed(warehouse_name="North", products=(("Bolt", "B-1", 2),))
        seed(company_id=first["company_id"], warehouse_name="South", supplier=None, products=(("Nut", "N-1", 4),))

        body = _alerts(client, first["company_id"])

        assert body["total_alerts"] == 2
        assert [a["warehouse_name"] for a in body["alerts"]] == ["North", "South"]

    def test_product_without_supplier_still_alerts(self, client, seed):
        ids = seed(supplier=None, products=(("Loose", "L-1", 1),))

        body = _alerts(client, ids["company_id"])

        assert body["alerts"][0]["supplier"] is None

    def test_order_is_deterministic(self, client, seed):
        ids = seed(products=(("zeta", "Z-1", 1), ("Alpha", "A-1", 2), ("mid", "M-1", 3)))

        first = _alerts(client, ids["company_id"])
        second = _alerts(client, ids["company_id"])

        assert first == second
        assert [a["product_name"] for a in first["alerts"]] == ["Alpha", "mid", "zeta"]

    def test_company_without_products(self, client, seed):
        ids = seed(products=())
        assert _alerts(client, ids["company_id"]) == {"alerts": [], "total_alerts": 0}

    def test_unknown_company_is_empty_not_error(self, client):
        assert _alerts(client, 987654) == {"alerts": [], "total_alerts": 0}

    def test_malformed_company_id_is_client_error(self, client):
        response = client.get("/companies/abc/alerts/low-stock")
        assert response.status_code == 400
        assert "company_id" in response.json()["error"]

    def test_provisioned_product_shows_up(self, client, seed):
        ids = seed(products=())
        created = client.post(
            "/products",
            json={"name": "Fresh", "sku": "F-1", "price": "3.00", "warehouse_id": ids["warehouse_id"], "initial_quantity": 2},
        )
        assert created.status_code == 201

        body = _alerts(client, ids["company_id"])

        assert body["alerts"][0]["product_id"] == created.json()["product_id"]
        assert body["alerts"][0]["supplier"] is None

    def test_oversized_company_id_is_client_error(self, client):
        response = client.get(f"/companies/{2**63}/alerts/low-stock")
        assert response.status_code == 400
        assert "company_id" in response.json()["error"]
