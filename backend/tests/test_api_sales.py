from datetime import date
from decimal import Decimal

from app.models.sale import Sale


def test_create_sale_round_trip(client, make_client):
    acme = make_client("Acme")
    payload = {"date": "2024-03-10", "clientId": acme.id, "amount": "99.95", "method": "Card", "note": "March"}

    response = client.post("/api/sales", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["date"] == "2024-03-10"
    assert body["clientId"] == acme.id
    assert body["clientName"] == "Acme"
    assert Decimal(body["amount"]) == Decimal("99.95")
    assert body["method"] == "Card"
    assert body["note"] == "March"


def test_create_sale_for_unknown_client_returns_404(client):
    payload = {"date": "2024-03-10", "clientId": 12345, "amount": "1", "method": "Cash"}

    assert client.post("/api/sales", json=payload).status_code == 404


def test_create_sale_requires_fields(client, make_client):
    acme = make_client("Acme")

    response = client.post("/api/sales", json={"clientId": acme.id, "amount": "1"})

    assert response.status_code == 422


def test_sales_are_listed_newest_first_with_client_name(client, make_client, make_sale):
    acme = make_client("Acme")
    globex = make_client("Globex")
    make_sale(acme.id, sale_date=date(2024, 1, 1))
    make_sale(globex.id, sale_date=date(2024, 2, 1))

    sales = client.get("/api/sales").json()

    assert [sale["clientName"] for sale in sales] == ["Globex", "Acme"]


def test_update_sale(client, make_client, make_sale):
    acme = make_client("Acme")
    globex = make_client("Globex")
    sale = make_sale(acme.id)

    response = client.put(f"/api/sales/{sale.id}", json={"clientId": globex.id, "amount": "15.00", "note": None})

    assert response.status_code == 200
    body = response.json()
    assert body["clientName"] == "Globex"
    assert Decimal(body["amount"]) == Decimal("15.00")
    assert body["method"] == "Cash"


def test_update_sale_rejects_null_required_field(client, make_client, make_sale):
    sale = make_sale(make_client("Acme").id)

    assert client.put(f"/api/sales/{sale.id}", json={"method": None}).status_code == 422


def test_update_missing_sale_returns_404(client):
    assert client.put("/api/sales/999", json={"method": "Cash"}).status_code == 404


def test_delete_sale_then_fetch_returns_404(client, make_client, make_sale):
    sale = make_sale(make_client("Acme").id)

    assert client.get(f"/api/sales/{sale.id}").status_code == 200
    assert client.delete(f"/api/sales/{sale.id}").status_code == 204
    assert client.get(f"/api/sales/{sale.id}").status_code == 404


def test_bulk_delete(client, db_session, make_client, make_sale):
    acme = make_client("Acme")
    sales = [make_sale(acme.id) for _ in range(3)]

    response = client.post("/api/sales/bulk-delete", json={"ids": [sales[0].id, sales[2].id, 999]})

    assert response.status_code == 200
    assert response.json() == {"deleted": 2}
    assert [sale.id for sale in db_session.query(Sale).all()] == [sales[1].id]


def test_export_sales_csv(client, make_client, make_sale):
    acme = make_client("Acme")
    sale = make_sale(acme.id, amount="12.50", sale_date=date(2024, 4, 2), method="Card")

    response = client.get("/api/sales/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == (
        f'attachment; filename="sales-export-{date.today().isoformat()}.csv"'
    )
    assert response.text.splitlines() == [
        "Sale ID,Date,Client ID,Client Name,Amount,Payment Method,Note",
        f"{sale.id},2024-04-02,{acme.id},Acme,12.50,Card,",
    ]


def test_import_template(client):
    response = client.get("/api/sales/template")

    assert response.status_code == 200
    assert 'filename="sales-import-template.csv"' in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert lines[0] == "date,client,amount,method,note"
    assert len(lines) == 3
    assert lines[1].startswith(date.today().isoformat())
    assert lines[2].startswith("MM/DD/YYYY,Another Client,250.50")
