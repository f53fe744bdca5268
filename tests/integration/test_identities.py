import pytest

from refi_engine.engine.simulator import simulate, simulate_with_refinance

CASES = [
    dict(extra_monthly=0, lump_sum_at_start=0, refi_after_months=60, refi_term_months=360,
         refi_rate=5, extra_after_refi=0, lump_sum_after_refi=0),
    dict(extra_monthly=750, lump_sum_at_start=25_000, refi_after_months=36, refi_term_months=180,
         refi_rate=4.25, extra_after_refi=500, lump_sum_after_refi=40_000),
    dict(extra_monthly=2500, lump_sum_at_start=0, refi_after_months=120, refi_term_months=240,
         refi_rate=7, extra_after_refi=2500, lump_sum_after_refi=0),
]


def _run(case):
    return simulate_with_refinance(450_000, 6.5, 360, **case)


def test_total_paid_equals_sum_of_payments_and_lumps():
    results = [_run(c) for c in CASES] + [simulate(450_000, 6.5, 360, 900, 10_000)]
    for r in results:
        paid = sum(row["Payment"] for row in r.schedule)
        assert r.total_paid == pytest.approx(paid, abs=0.01)
        lumps = sum(row["Payment"] for row in r.schedule if row["Kind"] == "lump")
        assert r.lump_sums_applied == pytest.approx(lumps)


def test_balance_identity_month_over_month():
    for case in CASES:
        r = _run(case)
        balance = 450_000.0
        for row in r.schedule:
            balance -= row["Principal"]
            assert row["Balance"] == pytest.approx(max(balance, 0.0), abs=1e-6)
            balance = row["Balance"]


def test_interest_never_negative_and_payments_capped():
    for case in CASES:
        r = _run(case)
        for row in r.schedule:
            assert row["Interest"] >= 0.0
            if row["Kind"] == "payment":
                limit = r.monthly_payment + case["extra_monthly"] if row["Phase"] == 1 \
                    else r.refi_monthly_payment + case["extra_after_refi"]
                assert row["Payment"] <= limit + 1e-9


def test_month_counters_respect_phase_terms():
    for case in CASES:
        r = _run(case)
        phase1 = [row for row in r.schedule if row["Phase"] == 1 and row["Kind"] == "payment"]
        phase2 = [row for row in r.schedule if row["Phase"] == 2 and row["Kind"] == "payment"]
        assert len(phase1) <= min(360, case["refi_after_months"])
        assert len(phase2) <= case["refi_term_months"]
        assert r.duration_months == len(phase1) + len(phase2)
