from datetime import date
from decimal import Decimal

import pytest

from app.core.exceptions import MissingColumnsError, StorageError
from app.models.client import Client
from app.models.sale import Sale
from app.services.sales_import import (
    chunked,
    commit_import,
    parse_amount,
    plan_import,
    write_in_batches,
)


def sale_record(client_id, amount="1.00"):
    return {
        "date": date(2024, 5, 1),
        "client_id": client_id,
        "amount": Decimal(amount),
        "method": "Cash",
        "note": None,
    }


def test_chunked_splits_25_records_into_10_10_5():
    assert [len(chunk) for chunk in chunked(list(range(25)), 10)] == [10, 10, 5]


def test_chunked_rejects_non_positive_size():
    with pytest.raises(ValueError):
        list(chunked([1, 2], 0))


@pytest.mark.parametrize(
    "value, expected",
    [("12.50", Decimal("12.50")), ("1,234.00", Decimal("1234.00")), ("abc", Decimal(0)), ("", Decimal(0)), ("NaN", Decimal(0))],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


def test_write_in_batches_counts_batches(db_session, make_client):
    acme = make_client("Acme")

    inserted, batches = write_in_batches(db_session, [sale_record(acme.id) for _ in range(25)], 10)

    assert (inserted, batches) == (25, 3)
    assert db_session.query(Sale).count() == 25


def test_write_in_batches_keeps_committed_batches_on_failure(db_session, make_client):
    acme = make_client("Acme")
    records = [sale_record(acme.id) for _ in range(25)]
    records[12]["client_id"] = None  # NOT NULL во второй пачке

    with pytest.raises(StorageError) as exc_info:
        write_in_batches(db_session, records, 10)

    assert exc_info.value.inserted == 10
    assert db_session.query(Sale).count() == 10


def test_plan_import_missing_amount_column_fails_before_writes(db_session, make_client):
    make_client("Acme")

    with pytest.raises(MissingColumnsError) as exc_info:
        plan_import(db_session, "date,client,method\n2024-01-01,Acme,Cash\n")

    assert exc_info.value.missing == ["amount"]
    assert db_session.query(Sale).count() == 0


def test_plan_import_requires_a_client_column(db_session):
    with pytest.raises(MissingColumnsError) as exc_info:
        plan_import(db_session, "date,amount,method\n2024-01-01,1,Cash\n")

    assert exc_info.value.missing == ["clientId/clientName/client"]


def test_plan_import_sorts_rows_into_ready_deferred_and_skipped(db_session, make_client):
    acme = make_client("Acme")
    text = (
        "date,clientId,client,amount,method,note\n"
        f"01/15/2024,{acme.id},,100.00,Cash,first\n"  # 2: по id
        "2024-01-16,,acme,oops,Card,\n"  # 3: по имени, сумма -> 0
        "02/30/2024,,Acme,5,Cash,\n"  # 4: плохая дата
        "2024-01-17,,Initech,7,Cash,\n"  # 5: новый клиент
        "2024-01-18,,,7,Cash,\n"  # 6: нет клиента
        "2024-01-19,,initech,8,Cash,\n"  # 7: тот же новый клиент
    )

    plan = plan_import(db_session, text)

    assert plan.total_rows == 6
    assert [record["amount"] for record in plan.write_ready] == [Decimal("100.00"), Decimal(0)]
    assert plan.write_ready[0]["note"] == "first"
    assert plan.write_ready[1]["note"] is None
    assert plan.new_clients == ["Initech"]
    assert [row.row_number for row in plan.deferred] == [5, 7]
    assert plan.skipped_rows == [4, 5, 6, 7]
    assert db_session.query(Sale).count() == 0


def test_commit_import_without_approval_keeps_deferred_rows_skipped(db_session, make_client):
    make_client("Acme")
    plan = plan_import(db_session, "date,client,amount,method\n2024-01-01,Acme,1,Cash\n2024-01-02,Initech,2,Cash\n")

    summary = commit_import(db_session, plan, approved_clients=[])

    assert summary.count == 1
    assert summary.skipped_rows == [3]
    assert summary.new_clients.total == 1
    assert summary.new_clients.added == 0
    assert db_session.query(Client).count() == 1


def test_commit_import_creates_approved_client_once(db_session, make_client):
    make_client("Acme")
    plan = plan_import(
        db_session,
        "date,client,amount,method\n2024-01-01,Initech,1,Cash\n2024-01-02,INITECH,2,Cash\n2024-01-03,Globex,3,Cash\n",
    )

    summary = commit_import(db_session, plan, approved_clients=["initech"])

    assert summary.count == 2
    assert summary.skipped_rows == [4]
    assert summary.new_clients.total == 2
    assert summary.new_clients.added == 1

    created = db_session.query(Client).filter(Client.client_name == "Initech").all()
    assert len(created) == 1
    assert created[0].rate == Decimal("1")
    assert created[0].no_of_staff == 1
    assert db_session.query(Sale).filter(Sale.client_id == created[0].id).count() == 2


def test_commit_import_uses_configured_batch_size(db_session, make_client):
    make_client("Acme")
    rows = "".join(f"2024-02-{day:02d},Acme,{day},Cash\n" for day in range(1, 26))
    plan = plan_import(db_session, "date,client,amount,method\n" + rows)

    summary = commit_import(db_session, plan, batch_size=10)

    assert summary.count == 25
    assert summary.batches == 3
    assert summary.skipped_rows == []
    assert summary.new_clients is None
