"""Domain value objects for warikan.

Everything here is immutable:
- Money: non-negative amount in yen (no minor units)
- YearMonth: calendar month, also used as a "payment month" label
- Payer: one of the two household members
- AdvancePayment: a single out-of-pocket expense record
- MonthlySettlement: the 50/50 split of a month's card total
- ImbalanceResult / CycleSettlement: who owes whom for advance payments
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

CURRENCY_UNIT = "円"


@dataclass(frozen=True, order=True)
class Money:
    """Non-negative amount of yen."""

    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def divide(self, divisor: int) -> "Money":
        """Divide the amount, rounding down.

        Args:
            divisor: Number of equal parts.

        Returns:
            The floored share. Any remainder is dropped.

        Raises:
            ValueError: If divisor is zero or negative.
        """
        if divisor == 0:
            raise ValueError("Cannot divide by zero")
        if divisor < 0:
            raise ValueError("Divisor must be positive")
        return Money(self.amount // divisor)

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def format(self) -> str:
        """Format as e.g. '45,894円'."""
        return f"{self.amount:,}{CURRENCY_UNIT}"


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar year and month."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if self.year < 0:
            raise ValueError("Year must be positive")
        if self.month < 1 or self.month > 12:
            raise ValueError("Month must be between 1 and 12")

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, text: str) -> "YearMonth":
        """Parse a YYYY-MM string.

        Raises:
            ValueError: If the text is not YYYY-MM or the month is out of range.
        """
        parts = text.strip().split("-")
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            raise ValueError(f"Invalid month '{text}', expected YYYY-MM")
        return cls(int(parts[0]), int(parts[1]))

    def shift(self, months: int) -> "YearMonth":
        """Return the month `months` later (earlier when negative)."""
        index = self.year * 12 + (self.month - 1) + months
        return YearMonth(index // 12, index % 12 + 1)

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month

    def format(self) -> str:
        """Format as e.g. '2024年10月'."""
        return f"{self.year}年{self.month:02d}月"


class Payer(Enum):
    """The two household members who can pay."""

    HUSBAND = "夫"
    WIFE = "妻"

    @classmethod
    def from_string(cls, value: str) -> "Payer":
        for payer in cls:
            if payer.value == value:
                return payer
        raise ValueError(f"Invalid payer value: {value}")

    @property
    def icon(self) -> str:
        return "👨" if self is Payer.HUSBAND else "👩"

    @property
    def other(self) -> "Payer":
        return Payer.WIFE if self is Payer.HUSBAND else Payer.HUSBAND


@dataclass(frozen=True)
class AdvancePayment:
    """Immutable record of one advance (out-of-pocket) payment."""

    id: str
    date: date
    payer: Payer
    amount: Money
    memo: str

    def formatted_date(self) -> str:
        return self.date.strftime("%Y-%m-%d")

    def is_in_month(self, year: int, month: int) -> bool:
        return self.date.year == year and self.date.month == month


@dataclass(frozen=True)
class MonthlySettlement:
    """Immutable 50/50 split of a month's credit card total."""

    year_month: YearMonth
    credit_card_total: Money
    husband_amount: Money
    wife_amount: Money

    def total_amount(self) -> Money:
        return self.husband_amount + self.wife_amount

    def format_message(self) -> str:
        """Render the chat message announcing the month's amounts."""
        return (
            "💳 今月の支払い金額が確定しました\n\n"
            f"【{self.year_month.format()}支払い分】\n\n"
            f"カード合計: {self.credit_card_total.format()}\n\n"
            f"👨 {self.husband_amount.format()}\n"
            f"👩 {self.wife_amount.format()}"
        )


@dataclass(frozen=True)
class ImbalanceResult:
    """Advance-payment totals and the full difference between them.

    settlement_payer is the member who paid less (they owe), or None
    when both paid the same.
    """

    husband_total: Money
    wife_total: Money
    settlement_amount: Money
    settlement_payer: Payer | None


@dataclass(frozen=True)
class CycleSettlement:
    """Advance-payment settlement for one billing cycle.

    Paying half_difference from debtor to creditor leaves both members
    having contributed the same amount.
    """

    husband_total: Money
    wife_total: Money
    half_difference: Money
    debtor: Payer | None

    @property
    def creditor(self) -> Payer | None:
        return self.debtor.other if self.debtor is not None else None
