from types import SimpleNamespace
from calculator import aggregate_daily_entries, aggregate_sales, is_bird_sale, is_sale
from models.transactions import TransactionKind


def entry(mortality, feed, weight):
    return SimpleNamespace(mortality=mortality, feed_consumed_in_kg=feed, average_weight_in_grams=weight)


def transaction(description, quantity_sold=None, total_weight=None, kind=None):
    return SimpleNamespace(description=description, quantity_sold=quantity_sold, total_weight=total_weight, kind=kind)


def test_empty_entries_are_all_zero():
    totals = aggregate_daily_entries([])
    assert (totals.total_mortality, totals.total_feed_consumed_in_kg, totals.latest_average_weight_in_grams) == (0, 0, 0)


def test_empty_transactions_are_all_zero():
    totals = aggregate_sales([])
    assert (totals.birds_sold, totals.total_weight_sold) == (0, 0)


def test_single_entry():
    totals = aggregate_daily_entries([entry(3, 120.5, 850)])
    assert totals.total_mortality == 3
    assert totals.total_feed_consumed_in_kg == 120.5
    assert totals.latest_average_weight_in_grams == 850


def test_latest_weight_is_first_entry():
    totals = aggregate_daily_entries([entry(1, 10, 1800), entry(2, 20, 1500), entry(3, 30, 1200)])
    assert totals.total_mortality == 6
    assert totals.total_feed_consumed_in_kg == 60
    assert totals.latest_average_weight_in_grams == 1800


def test_totals_are_additive_over_concatenation():
    first = [entry(1, 10, 900), entry(4, 12.5, 850)]
    second = [entry(2, 30, 1600), entry(0, 7, 1500)]

    combined = aggregate_daily_entries(first + second)
    a = aggregate_daily_entries(first)
    b = aggregate_daily_entries(second)

    assert combined.total_mortality == a.total_mortality + b.total_mortality
    assert combined.total_feed_consumed_in_kg == a.total_feed_consumed_in_kg + b.total_feed_consumed_in_kg


def test_latest_weight_depends_on_order():
    first = [entry(1, 10, 900)]
    second = [entry(2, 30, 1600)]

    assert aggregate_daily_entries(first + second).latest_average_weight_in_grams == 900
    assert aggregate_daily_entries(second + first).latest_average_weight_in_grams == 1600


def test_nan_feed_propagates_without_raising():
    totals = aggregate_daily_entries([entry(1, float("nan"), 900)])
    assert totals.total_feed_consumed_in_kg != totals.total_feed_consumed_in_kg


def test_legacy_bird_sale_match_is_case_sensitive():
    rows = [
        transaction("Sale of birds to Ramesh", quantity_sold=100, total_weight=180),
        transaction("sale of birds (lowercase)", quantity_sold=50, total_weight=90),
        transaction("Feed purchase", quantity_sold=10, total_weight=500),
    ]
    totals = aggregate_sales(rows)

    assert totals.birds_sold == 100
    # Weight uses the case-insensitive "sale" match
    assert totals.total_weight_sold == 270


def test_missing_quantities_count_as_zero():
    rows = [transaction("Sale of birds", quantity_sold=None, total_weight=None), transaction("Sale of birds", 20, 40.0)]
    totals = aggregate_sales(rows)
    assert totals.birds_sold == 20
    assert totals.total_weight_sold == 40.0


def test_kind_overrides_description():
    logged = transaction("Sale of 100 birds from batch Flock A", 100, 180, kind=TransactionKind.SALE)
    expense = transaction("Sale of birds transport charges", 5, 10, kind=TransactionKind.EXPENSE)

    assert is_bird_sale(logged) and is_sale(logged)
    assert not is_bird_sale(expense) and not is_sale(expense)

    totals = aggregate_sales([logged, expense])
    assert totals.birds_sold == 100
    assert totals.total_weight_sold == 180


def test_kind_given_as_string():
    assert is_bird_sale(transaction("Weekly sale", 10, 20, kind="sale"))
    assert not is_sale(transaction("Weekly sale", 10, 20, kind="payment"))


def test_legacy_sale_description_without_marker_counts_weight_only():
    row = transaction("Sale of 100 birds from batch Flock A", 100, 180)
    assert not is_bird_sale(row)
    assert is_sale(row)


def test_sale_kind_always_counts_as_bird_sale():
    # A batch only sells birds, so a sale-kind row counts its quantity as birds
    row = transaction("Sale of feed bags", 3, 0, kind=TransactionKind.SALE)
    assert is_bird_sale(row)
    assert aggregate_sales([row]).birds_sold == 3
