from tests.conftest import days_ago


def post_entry(client, headers, batch_id, **fields):
    payload = {"date": days_ago(10), "mortality": 0, "feed_consumed_in_kg": 0, "average_weight_in_grams": 0}
    payload.update(fields)
    return client.post(f"/batches/{batch_id}/daily-entries/", json=payload, headers=headers)


def test_entries_are_listed_most_recent_first(client, headers, batch):
    for n in (12, 10, 11):
        assert post_entry(client, headers, batch["id"], date=days_ago(n), mortality=n).status_code == 201

    entries = client.get(f"/batches/{batch['id']}/daily-entries/", headers=headers).json()
    assert [e["date"] for e in entries] == [days_ago(10), days_ago(11), days_ago(12)]


def test_negative_values_are_rejected(client, headers, batch):
    assert post_entry(client, headers, batch["id"], mortality=-1).status_code == 422
    assert post_entry(client, headers, batch["id"], feed_consumed_in_kg=-0.5).status_code == 422
    assert post_entry(client, headers, batch["id"], average_weight_in_grams=-10).status_code == 422


def test_entry_date_must_fall_within_the_batch(client, headers, batch):
    assert post_entry(client, headers, batch["id"], date=days_ago(45)).status_code == 400
    assert post_entry(client, headers, batch["id"], date=days_ago(-3)).status_code == 400


def test_one_entry_per_day(client, headers, batch):
    assert post_entry(client, headers, batch["id"]).status_code == 201
    response = post_entry(client, headers, batch["id"])
    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]
