import pandas as pd
import pytest


def make_records(n, **columns):
    """Build ``n`` records with an ``id`` column plus per-row column functions."""
    records = []
    for i in range(n):
        record = {"id": f"R{i:03d}"}
        for name, value in columns.items():
            record[name] = value(i) if callable(value) else value
        records.append(record)
    return records


@pytest.fixture
def ten_records():
    return make_records(10, amount=lambda i: (i + 1) * 10.0)


@pytest.fixture
def hundred_records():
    return make_records(100, amount=lambda i: float(i))


@pytest.fixture
def stratified_records():
    """12 records: 8 in stratum A followed by 4 in stratum B."""
    return make_records(12, branch=lambda i: "A" if i < 8 else "B")


@pytest.fixture
def ledger_df():
    return pd.DataFrame(
        {
            "invoice": [f"INV-{i}" for i in range(20)],
            "amount": [float((i + 1) * 10) for i in range(20)],
            "region": ["north" if i % 3 else "south" for i in range(20)],
        }
    )
