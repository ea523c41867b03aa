"""Tests for simple random sampling."""

from auditflow.scripts.simple_random import perform_simple_random_sampling
from tests.conftest import make_records


def indices(items):
    return [item.original_index for item in items]


class TestSimpleRandomSampling:
    def test_known_selection(self, ten_records):
        sample = perform_simple_random_sampling(ten_records, 3, 42)
        assert indices(sample) == [5, 3, 7]

    def test_repeatable(self, ten_records):
        first = perform_simple_random_sampling(ten_records, 3, 42)
        second = perform_simple_random_sampling(ten_records, 3, 42)
        assert indices(first) == indices(second)
        assert [item.record for item in first] == [item.record for item in second]

    def test_other_seed_gives_other_sample(self, ten_records):
        first = perform_simple_random_sampling(ten_records, 3, 42)
        second = perform_simple_random_sampling(ten_records, 3, 43)
        assert set(indices(first)) != set(indices(second))

    def test_items_carry_records(self, ten_records):
        for item in perform_simple_random_sampling(ten_records, 4, 8):
            assert item.record == ten_records[item.original_index]

    def test_oversized_request_returns_everything(self, ten_records):
        sample = perform_simple_random_sampling(ten_records, 25, 42)
        assert indices(sample) == [5, 3, 7, 6, 8, 9, 1, 4, 0, 2]

    def test_zero_size(self, ten_records):
        assert perform_simple_random_sampling(ten_records, 0, 42) == []

    def test_empty_population(self):
        assert perform_simple_random_sampling([], 3, 42) == []

    def test_everything_excluded(self, ten_records):
        assert perform_simple_random_sampling(ten_records, 3, 42, set(range(10))) == []

    def test_exclusions_respected(self, ten_records):
        excluded = {5, 3, 7}
        sample = perform_simple_random_sampling(ten_records, 5, 42, excluded)
        assert len(sample) == 5
        assert not excluded & set(indices(sample))

    def test_complementary_round_is_disjoint(self):
        records = make_records(20)
        initial = perform_simple_random_sampling(records, 5, 1)
        assert indices(initial) == [17, 6, 16, 8, 13]

        complementary = perform_simple_random_sampling(
            records, 5, 2, set(indices(initial))
        )
        combined = indices(initial) + indices(complementary)
        assert len(complementary) == 5
        assert len(set(combined)) == 10

    def test_unique_indices(self, hundred_records):
        sample = perform_simple_random_sampling(hundred_records, 60, 99)
        assert len(set(indices(sample))) == 60
