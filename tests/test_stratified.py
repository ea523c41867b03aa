"""Tests for stratified sampling."""

from collections import Counter

import pytest

from auditflow.scripts.population import ColumnNotFoundError, build_population_view
from auditflow.scripts.stratified import (
    allocate_samples_proportional,
    calculate_allocation_summary,
    partition_strata,
    perform_stratified_sampling,
)
from tests.conftest import make_records


def indices(items):
    return [item.original_index for item in items]


def strata_counts(items, column="branch"):
    return Counter(item.record[column] for item in items)


class TestPartitionStrata:
    def test_groups_by_value(self, stratified_records):
        strata = partition_strata(build_population_view(stratified_records).items, "branch")
        assert list(strata) == ["A", "B"]
        assert [len(items) for items in strata.values()] == [8, 4]

    def test_numeric_keys_come_first_in_ascending_order(self):
        values = ["b", 2, "a", 1, 10]
        records = make_records(5, branch=lambda i: values[i])
        strata = partition_strata(build_population_view(records).items, "branch")
        assert list(strata) == ["1", "2", "10", "b", "a"]

    def test_items_keep_relative_order(self):
        records = make_records(6, branch=lambda i: "odd" if i % 2 else "even")
        strata = partition_strata(build_population_view(records).items, "branch")
        assert indices(strata["even"]) == [0, 2, 4]
        assert indices(strata["odd"]) == [1, 3, 5]


class TestProportionalAllocation:
    def test_two_to_one_strata(self):
        assert allocate_samples_proportional({"A": 8, "B": 4}, 12, 3) == {"A": 2, "B": 1}

    def test_halves_round_up(self):
        assert allocate_samples_proportional({"A": 5, "B": 5}, 10, 5) == {"A": 3, "B": 3}

    def test_small_strata_round_to_zero(self):
        allocation = allocate_samples_proportional({"A": 1, "B": 99}, 100, 10)
        assert allocation == {"A": 0, "B": 10}


class TestStratifiedSampling:
    def test_proportional_selection(self, stratified_records):
        sample = perform_stratified_sampling(stratified_records, 3, "branch", 42)
        assert len(sample) == 3
        assert strata_counts(sample) == {"A": 2, "B": 1}
        # no reconciliation: stratum A items come before stratum B items
        assert [item.record["branch"] for item in sample] == ["A", "A", "B"]

    def test_repeatable(self, stratified_records):
        first = perform_stratified_sampling(stratified_records, 5, "branch", 9)
        second = perform_stratified_sampling(stratified_records, 5, "branch", 9)
        assert indices(first) == indices(second)

    def test_overshoot_is_truncated(self):
        records = make_records(10, branch=lambda i: "A" if i < 5 else "B")
        sample = perform_stratified_sampling(records, 5, "branch", 3)
        assert len(sample) == 5
        assert len(set(indices(sample))) == 5

    def test_shortfall_is_backfilled(self):
        # ten strata of one item each: every target rounds to 0
        records = make_records(10, branch=lambda i: f"S{i}")
        sample = perform_stratified_sampling(records, 4, "branch", 3)
        assert len(sample) == 4
        assert len(set(indices(sample))) == 4

    @pytest.mark.parametrize("size", range(0, 31, 3))
    @pytest.mark.parametrize("seed", [1, 17, 2024])
    def test_exact_size(self, size, seed):
        records = make_records(30, branch=lambda i: "ABCDEFG"[i % 7] if i < 23 else "H")
        sample = perform_stratified_sampling(records, size, "branch", seed)
        assert len(sample) == size
        assert len(set(indices(sample))) == size

    def test_oversized_request(self, stratified_records):
        sample = perform_stratified_sampling(stratified_records, 50, "branch", 4)
        assert sorted(indices(sample)) == list(range(12))

    def test_exclusions_respected(self, stratified_records):
        excluded = {0, 1, 2, 8}
        sample = perform_stratified_sampling(stratified_records, 4, "branch", 4, excluded)
        assert len(sample) == 4
        assert not excluded & set(indices(sample))

    def test_zero_size(self, stratified_records):
        assert perform_stratified_sampling(stratified_records, 0, "branch", 4) == []

    def test_empty_after_exclusion(self, stratified_records):
        assert (
            perform_stratified_sampling(stratified_records, 3, "branch", 4, set(range(12)))
            == []
        )

    def test_missing_column_fails_fast(self, stratified_records):
        with pytest.raises(ColumnNotFoundError):
            perform_stratified_sampling(stratified_records, 3, "region", 4)

    def test_dataframe_input(self, ledger_df):
        sample = perform_stratified_sampling(ledger_df, 6, "region", 12)
        assert len(sample) == 6
        # 13 north and 7 south: 3.9 -> 4 and 2.1 -> 2
        assert strata_counts(sample, "region") == {"north": 4, "south": 2}


class TestAllocationSummary:
    def test_summary_counts(self, stratified_records):
        view = build_population_view(stratified_records)
        sample = perform_stratified_sampling(stratified_records, 3, "branch", 42)
        summary = calculate_allocation_summary(view.items, sample, "branch")

        assert list(summary["Stratum"]) == ["A", "B"]
        assert list(summary["Population"]) == [8, 4]
        assert list(summary["Samples"]) == [2, 1]
        assert list(summary["Population %"]) == ["66.7%", "33.3%"]

    def test_empty_sample(self, stratified_records):
        view = build_population_view(stratified_records)
        summary = calculate_allocation_summary(view.items, [], "branch")
        assert list(summary["Samples"]) == [0, 0]
        assert list(summary["Sample %"]) == ["0.0%", "0.0%"]
