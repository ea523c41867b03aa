"""Tests for accumulated samples: complementary rounds and replacements."""

import pytest

from auditflow.sampling import SamplingMethod, SamplingSession
from auditflow.scripts.population import SamplingConfigurationError
from tests.conftest import make_records


@pytest.fixture
def population():
    return make_records(
        40,
        amount=lambda i: float((i % 7 + 1) * 100),
        branch=lambda i: "ABC"[i % 3],
    )


@pytest.mark.parametrize(
    "method, column",
    [
        (SamplingMethod.SIMPLE, None),
        (SamplingMethod.SYSTEMATIC, None),
        (SamplingMethod.STRATIFIED, "branch"),
        (SamplingMethod.MONETARY_UNIT, "amount"),
    ],
)
class TestComplementaryRounds:
    def test_rounds_are_disjoint(self, population, method, column):
        session = SamplingSession(population, method, column)
        initial = session.draw(5, 1)
        complementary = session.draw_complementary(5, 2)

        assert initial.success and complementary.success
        assert len(session.items) == 10
        assert len(set(session.indices)) == 10
        assert not set(initial.indices) & set(complementary.indices)

    def test_same_seed_complementary_round(self, population, method, column):
        session = SamplingSession(population, method, column)
        session.draw(6, 77)
        session.draw_complementary(4, 77)
        assert len(set(session.indices)) == 10

    def test_replacement_keeps_size(self, population, method, column):
        session = SamplingSession(population, method, column)
        session.draw(8, 3)
        flagged = session.indices[2]

        replacement = session.replace([flagged], 4)

        assert replacement.sample_size == 1
        assert len(session.items) == 8
        assert flagged not in session.indices
        assert session.items[2].is_replacement
        assert session.items[2].original_index == replacement.indices[0]
        assert len(set(session.indices)) == 8


class TestSamplingSession:
    def test_string_method(self, population):
        session = SamplingSession(population, "stratified", "branch")
        assert session.method is SamplingMethod.STRATIFIED

    def test_draw_resets_previous_rounds(self, population):
        session = SamplingSession(population, SamplingMethod.SIMPLE)
        session.draw(5, 1)
        session.draw_complementary(5, 2)
        session.draw(3, 9)
        assert len(session.items) == 3
        assert len(session.rounds) == 1

    def test_replaced_items_are_not_drawn_again(self):
        records = make_records(6)
        session = SamplingSession(records, SamplingMethod.SIMPLE)
        session.draw(3, 5)
        flagged = session.indices[:2]
        session.replace(flagged, 5)
        session.draw_complementary(10, 6)

        assert len(session.items) == 4
        assert not set(flagged) & set(session.indices)
        assert session.replaced_indices == set(flagged)

    def test_replacement_when_population_exhausted(self):
        records = make_records(4)
        session = SamplingSession(records, SamplingMethod.SIMPLE)
        session.draw(3, 5)
        flagged = session.indices[:2]

        results = session.replace(flagged, 8)

        assert results.sample_size == 1
        assert len(session.items) == 2
        assert sum(item.is_replacement for item in session.items) == 1

    def test_replace_unknown_index(self, population):
        session = SamplingSession(population, SamplingMethod.SIMPLE)
        session.draw(3, 5)
        missing = next(i for i in range(40) if i not in session.indices)
        with pytest.raises(SamplingConfigurationError, match="not part of the current sample"):
            session.replace([missing], 1)

    def test_replace_nothing(self, population):
        session = SamplingSession(population, SamplingMethod.SIMPLE)
        session.draw(3, 5)
        before = session.indices
        results = session.replace([], 1)
        assert results.success
        assert results.items == []
        assert session.indices == before

    def test_failed_round_leaves_sample_untouched(self, population):
        session = SamplingSession(population, SamplingMethod.STRATIFIED, "branch")
        session.draw(5, 1)
        before = session.indices
        session.column = "missing"
        results = session.draw_complementary(3, 2)
        assert not results.success
        assert session.indices == before
        assert len(session.rounds) == 1

    def test_to_dataframe_flags_replacements(self, population):
        session = SamplingSession(population, SamplingMethod.SIMPLE)
        session.draw(4, 12)
        session.replace([session.indices[0]], 13)
        df = session.to_dataframe()
        assert list(df["_is_replacement"]) == [True, False, False, False]
        assert list(df["_original_index"]) == session.indices
