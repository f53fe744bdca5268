from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class LoanTerms:
    principal: float
    annual_rate: float  # percent, e.g. 6.0
    term_months: int


@dataclass(frozen=True)
class ExtraPaymentPlan:
    monthly_extra: float = 0.0
    lump_sum: float = 0.0


@dataclass(frozen=True)
class RefinanceEvent:
    after_months: int
    annual_rate: float  # percent
    term_months: int


@dataclass
class PhaseOutcome:
    """State handed back by one run of the phase-stepping loop."""

    balance: float
    paid: float
    months: int


@dataclass
class SimulationResult:
    total_paid: float
    duration_months: int
    monthly_payment: float
    refi_monthly_payment: Optional[float] = None
    lump_sums_applied: float = field(default=0.0, repr=False)
    schedule: List[dict] = field(default_factory=list, repr=False)

    @property
    def has_refinance_payment(self) -> bool:
        return self.refi_monthly_payment is not None


@dataclass
class ScenarioResult:
    name: str
    description: str
    total_paid: float
    total_interest: float
    duration_months: int
    monthly_payment: float
    extra_payment: float = 0.0
    refi_monthly_payment: Optional[float] = None
    extra_payment_after_refi: float = 0.0
    schedule: List[dict] = field(default_factory=list, repr=False)


@dataclass(frozen=True)
class CalculatorInputs:
    """Caller-supplied record driving the four scenarios.

    Rates are percentages; all terms and offsets are in months.
    """

    loan_amount: float = 500_000.0
    interest_rate: float = 6.0
    loan_term_months: int = 360
    extra_payment: float = 1_000.0
    lump_sum_at_start: float = 0.0
    refi_after_months: int = 60
    refi_term_months: int = 360
    refi_rate: float = 6.0
    extra_payment_after_refi: float = 1_000.0
    lump_sum_after_refi: float = 0.0

    @property
    def loan(self) -> LoanTerms:
        return LoanTerms(self.loan_amount, self.interest_rate, self.loan_term_months)

    @property
    def refinance(self) -> RefinanceEvent:
        return RefinanceEvent(self.refi_after_months, self.refi_rate, self.refi_term_months)

    @property
    def extra_plan(self) -> ExtraPaymentPlan:
        return ExtraPaymentPlan(self.extra_payment, self.lump_sum_at_start)

    @property
    def post_refi_plan(self) -> ExtraPaymentPlan:
        return ExtraPaymentPlan(self.extra_payment_after_refi, self.lump_sum_after_refi)
