import pytest

from refi_engine.engine.simulator import simulate, simulate_with_refinance


def _refi(**overrides):
    args = dict(
        principal=500_000,
        annual_rate=6,
        term_months=360,
        extra_monthly=0,
        lump_sum_at_start=0,
        refi_after_months=60,
        refi_term_months=300,
        refi_rate=6,
        extra_after_refi=0,
        lump_sum_after_refi=0,
    )
    args.update(overrides)
    return simulate_with_refinance(**args)


def test_same_rate_over_remaining_term_matches_standard():
    standard = simulate(500_000, 6, 360)
    r = _refi()
    assert r.duration_months == 360
    assert r.refi_monthly_payment == pytest.approx(standard.monthly_payment, abs=0.01)
    assert r.total_paid == pytest.approx(standard.total_paid, abs=1)


def test_refinance_at_month_zero_is_a_fresh_loan():
    standard = simulate(500_000, 6, 360)
    r = _refi(refi_after_months=0, refi_term_months=360)
    assert r.refi_monthly_payment == pytest.approx(standard.monthly_payment)
    assert r.duration_months == 360
    assert r.total_paid == pytest.approx(standard.total_paid, abs=0.01)


def test_lower_rate_reduces_total_paid():
    same = _refi()
    lower = _refi(refi_rate=4)
    assert lower.total_paid < same.total_paid
    assert lower.refi_monthly_payment < same.refi_monthly_payment


def test_payment_recomputed_from_balance_owed():
    r = _refi(refi_term_months=360)
    # longer term over a smaller balance: lower payment than the original loan
    assert r.refi_monthly_payment < r.monthly_payment
    assert r.duration_months == 60 + 360


def test_loan_paid_off_before_refinance():
    plain = simulate(100_000, 6, 360, 20_000)
    r = _refi(principal=100_000, extra_monthly=20_000)
    assert plain.duration_months < 60
    assert r.refi_monthly_payment is None
    assert r.duration_months == plain.duration_months
    assert r.total_paid == plain.total_paid


def test_lump_sum_at_refinance_clears_balance():
    r = _refi(lump_sum_after_refi=10_000_000)
    assert r.refi_monthly_payment is None
    assert r.duration_months == 60
    assert r.schedule[-1]["Kind"] == "lump"
    assert r.schedule[-1]["Balance"] == 0.0
    assert r.total_paid == pytest.approx(sum(row["Payment"] for row in r.schedule), abs=0.01)


def test_oversized_refinance_lump_counts_in_full():
    r = _refi(lump_sum_after_refi=10_000_000)
    phase1 = sum(row["Payment"] for row in r.schedule if row["Kind"] == "payment")
    assert phase1 == pytest.approx(60 * 2997.75, abs=1)
    assert r.total_paid == pytest.approx(phase1 + 10_000_000, abs=0.01)
    assert r.lump_sums_applied == 10_000_000


def test_lump_sum_at_start_covers_loan():
    r = _refi(lump_sum_at_start=600_000)
    assert r.duration_months == 0
    assert r.total_paid == 500_000
    assert r.refi_monthly_payment is None


def test_refinance_phase_bounded_by_its_own_term():
    r = _refi(refi_after_months=120, refi_term_months=180)
    assert r.duration_months <= 120 + 180
    phase2 = [row for row in r.schedule if row["Phase"] == 2]
    assert len(phase2) <= 180


def test_extra_after_refinance_shortens_second_phase():
    no_extra = _refi(refi_term_months=360)
    extra = _refi(refi_term_months=360, extra_after_refi=1000)
    assert extra.duration_months < no_extra.duration_months
    assert extra.total_paid < no_extra.total_paid
    assert extra.refi_monthly_payment == pytest.approx(no_extra.refi_monthly_payment)
