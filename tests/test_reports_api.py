from decimal import Decimal
from io import BytesIO

import pytest
from openpyxl import load_workbook

from tests.conftest import days_ago


@pytest.fixture
def batch_with_ledger(client, headers, batch):
    for n, (mortality, feed) in zip((12, 11), [(10, 1000), (20, 1500)]):
        client.post(f"/batches/{batch['id']}/daily-entries/", json={
            "date": days_ago(n), "mortality": mortality, "feed_consumed_in_kg": feed, "average_weight_in_grams": 1700,
        }, headers=headers)
    client.post(f"/transactions/batches/{batch['id']}/sale", json={
        "date": days_ago(1), "quantity_sold": 100, "total_weight": 200, "rate_per_kg": 90, "buyer_name": "Ramesh Traders",
    }, headers=headers)
    client.post("/transactions/", json={
        "date": days_ago(20), "description": "Starter feed", "amount": "6000", "kind": "purchase",
        "batch_id": batch["id"], "inventory_item_name": "Starter Feed", "cost_of_goods_sold": "5000",
    }, headers=headers)
    client.post("/transactions/", json={
        "date": days_ago(15), "description": "Vaccines", "amount": "800", "kind": "expense",
        "batch_id": batch["id"], "cost_of_goods_sold": "750",
    }, headers=headers)
    return batch


def test_profitability_report(client, headers, batch_with_ledger):
    response = client.get(f"/reports/batches/{batch_with_ledger['id']}/profitability", headers=headers)
    assert response.status_code == 200, response.text

    report = response.json()
    assert Decimal(str(report["revenue"])) == Decimal("18000")
    assert Decimal(str(report["cogs"])) == Decimal("5750")
    assert Decimal(str(report["profit"])) == Decimal("12250")
    assert report["mortality_rate"] == pytest.approx(3.0)
    assert report["fcr"] == pytest.approx(2500 / 200)
    breakdown = {item["name"]: Decimal(str(item["value"])) for item in report["cost_breakdown"]}
    assert breakdown == {"Starter Feed": Decimal("5000"), "Uncategorized": Decimal("750")}


def test_profitability_report_without_sales(client, headers, batch):
    report = client.get(f"/reports/batches/{batch['id']}/profitability", headers=headers).json()
    assert report["fcr"] == 0
    assert report["mortality_rate"] == 0
    assert Decimal(str(report["revenue"])) == 0


def test_profitability_export(client, headers, batch_with_ledger):
    response = client.get(f"/reports/batches/{batch_with_ledger['id']}/profitability.xlsx", headers=headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")

    workbook = load_workbook(BytesIO(response.content))
    assert workbook.sheetnames == ["Summary", "Cost Breakdown"]
    summary = {row[0]: row[1] for row in workbook["Summary"].iter_rows(min_row=2, values_only=True)}
    assert summary["Revenue"] == 18000
    assert summary["Net Profit"] == 12250
