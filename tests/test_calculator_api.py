import pytest
from tests.conftest import days_ago

MANUAL_INPUTS = {
    "initial_chick_count": 1000,
    "final_chick_count": 950,
    "feed_cost_per_bag": 1200,
    "bags_of_feed_used": 40,
    "average_chick_weight": 2.0,
}


def seed_batch_records(client, headers, batch_id):
    for n, (mortality, feed, weight) in zip((12, 11, 10), [(10, 800, 1200), (15, 900, 1500), (5, 800, 1800)]):
        response = client.post(f"/batches/{batch_id}/daily-entries/", json={
            "date": days_ago(n), "mortality": mortality, "feed_consumed_in_kg": feed, "average_weight_in_grams": weight,
        }, headers=headers)
        assert response.status_code == 201, response.text
    response = client.post(f"/transactions/batches/{batch_id}/sale", json={
        "date": days_ago(1), "quantity_sold": 100, "total_weight": 180, "rate_per_kg": 100, "buyer_name": "Ramesh Traders",
    }, headers=headers)
    assert response.status_code == 201, response.text


def test_manual_calculation_needs_no_account(client):
    response = client.post("/calculator/calculate", json=MANUAL_INPUTS)
    assert response.status_code == 200, response.text

    body = response.json()
    assert body["result"]["mortality_rate"] == pytest.approx(5.0)
    assert body["result"]["total_feed_cost"] == 48000
    assert body["result"]["feed_conversion_ratio"] == pytest.approx(2000 / 1900)
    assert body["result"]["cost_per_kg_of_chicken"] == pytest.approx(48000 / 1900)
    assert body["formatted"] == {
        "mortality_rate": "5.00%",
        "total_feed_cost": "₹ 48,000.00",
        "feed_conversion_ratio": "1.05",
        "cost_per_kg_of_chicken": "₹ 25.26",
    }


def test_degenerate_manual_calculation(client):
    response = client.post("/calculator/calculate", json={
        "initial_chick_count": 0, "final_chick_count": 0, "feed_cost_per_bag": 500,
        "bags_of_feed_used": 10, "average_chick_weight": 0,
    })
    result = response.json()["result"]
    assert result == {
        "mortality_rate": 0,
        "total_feed_cost": 5000,
        "feed_conversion_ratio": 0,
        "cost_per_kg_of_chicken": 0,
    }


@pytest.mark.parametrize("field,value", [("final_chick_count", -1), ("feed_cost_per_bag", "abc"), ("bags_of_feed_used", None), ("bags_of_feed_used", True)])
def test_invalid_manual_input_is_rejected(client, field, value):
    response = client.post("/calculator/calculate", json={**MANUAL_INPUTS, field: value})
    assert response.status_code == 422
    assert response.json() == {
        "detail": "Please enter a valid, non-negative number for all fields.",
        "fields": [field],
    }


def test_overflowing_result_is_rejected(client):
    response = client.post("/calculator/calculate", json={**MANUAL_INPUTS, "feed_cost_per_bag": 1e308, "bags_of_feed_used": 1e308})
    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "The values entered are too large to calculate."
    assert "total_feed_cost" in body["fields"]


def test_autofill_from_batch(client, headers, batch):
    seed_batch_records(client, headers, batch["id"])

    response = client.get(f"/calculator/autofill/{batch['id']}", params={"sequence": 3}, headers=headers)
    assert response.status_code == 200, response.text

    body = response.json()
    assert body["sequence"] == 3
    assert body["initial_chick_count"] == 1000
    assert body["final_chick_count"] == 870
    assert body["bags_of_feed_used"] == 50.0
    assert body["average_chick_weight"] == 1.8
    assert body["entries"]["total_mortality"] == 30
    assert body["entries"]["total_feed_consumed_in_kg"] == 2500
    assert body["sales"]["birds_sold"] == 100
    assert "feed_cost_per_bag" not in body


def test_autofill_for_unknown_batch(client, headers):
    assert client.get("/calculator/autofill/999", headers=headers).status_code == 404


def test_calculate_for_batch(client, headers, batch):
    seed_batch_records(client, headers, batch["id"])

    response = client.post(f"/calculator/batches/{batch['id']}", json={"feed_cost_per_bag": 1500}, headers=headers)
    assert response.status_code == 200, response.text

    body = response.json()
    assert body["batch_id"] == batch["id"]
    assert body["inputs"]["final_chick_count"] == 870
    assert body["result"]["mortality_rate"] == pytest.approx(13.0)
    assert body["result"]["total_feed_cost"] == pytest.approx(75000)
    assert body["result"]["feed_conversion_ratio"] == pytest.approx(2500 / (870 * 1.8))


def test_calculate_for_batch_requires_feed_cost(client, headers, batch):
    response = client.post(f"/calculator/batches/{batch['id']}", json={"feed_cost_per_bag": -5}, headers=headers)
    assert response.status_code == 422
