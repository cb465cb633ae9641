"""Tests for warikan.services use cases."""

from datetime import date
from pathlib import Path
from typing import Any

import pytest

from warikan import services
from warikan.config import Settings, ZaimCredentials
from warikan.domain.models import Money, Payer, YearMonth
from warikan.errors import ConfigError, NotFoundError


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        zaim_consumer_key="ck",
        zaim_consumer_secret="cs",
        zaim_access_token="at",
        zaim_access_token_secret="ats",
        db_path=tmp_path / "warikan.db",
    )


class TestGetCardSettlement:
    """Tests for get_card_settlement."""

    def test_splits_card_total(self, settings: Settings) -> None:
        """Should total the active card's month and floor each half."""
        received: list[ZaimCredentials] = []

        def fetcher(credentials: ZaimCredentials) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
            received.append(credentials)
            accounts = [
                {"id": 1, "name": "財布", "active": 1},
                {"id": 2, "name": "楽天カード", "active": 0},
                {"id": 3, "name": "楽天カード", "active": 1},
            ]
            transactions = [
                {"date": "2024-11-02", "amount": 1001, "from_account_id": 3},
                {"date": "2024-11-30", "amount": 2000, "to_account_id": 3},
                {"date": "2024-11-15", "amount": 5000, "from_account_id": 2},
                {"date": "2024-12-01", "amount": 7000, "from_account_id": 3},
            ]
            return accounts, transactions

        settlement = services.get_card_settlement(settings, YearMonth(2024, 11), fetcher)

        assert received[0].consumer_key == "ck"
        assert settlement.credit_card_total == Money(3001)
        assert settlement.husband_amount == Money(1500)
        assert settlement.wife_amount == Money(1500)

    def test_missing_card(self, settings: Settings) -> None:
        """Should raise NotFoundError without an active card."""
        with pytest.raises(NotFoundError):
            services.get_card_settlement(settings, YearMonth(2024, 11), lambda credentials: ([], []))

    def test_missing_credentials(self, tmp_path: Path) -> None:
        """Should refuse to call the ledger without credentials."""
        with pytest.raises(ConfigError):
            services.get_card_settlement(Settings(db_path=tmp_path / "w.db"), YearMonth(2024, 11))


class TestAdvancePaymentUseCases:
    """Tests for the advance-payment use cases."""

    def test_month_imbalance(self, settings: Settings) -> None:
        """Should compare payments dated within the calendar month."""
        services.add_advance_payment(settings, date(2025, 10, 1), Payer.HUSBAND, Money(5000), "食材")
        services.add_advance_payment(settings, date(2025, 10, 31), Payer.WIFE, Money(2000), "日用品")
        services.add_advance_payment(settings, date(2025, 11, 1), Payer.WIFE, Money(9000), "来月")

        result = services.calculate_month_imbalance(settings, YearMonth(2025, 10))

        assert result.husband_total == Money(5000)
        assert result.wife_total == Money(2000)
        assert result.settlement_amount == Money(3000)
        assert result.settlement_payer == Payer.WIFE

    def test_cycle_payments(self, settings: Settings) -> None:
        """Should load the 26th-to-25th window before the payment month."""
        services.add_advance_payment(settings, date(2025, 9, 26), Payer.HUSBAND, Money(1001), "a")
        services.add_advance_payment(settings, date(2025, 10, 25), Payer.WIFE, Money(0), "b")
        services.add_advance_payment(settings, date(2025, 10, 26), Payer.WIFE, Money(5000), "c")

        start, end, payments, settlement = services.get_cycle_payments(settings, YearMonth(2025, 11))

        assert (start, end) == (date(2025, 9, 26), date(2025, 10, 25))
        assert [p.memo for p in payments] == ["a", "b"]
        assert settlement.half_difference == Money(500)
        assert settlement.debtor == Payer.WIFE
        assert settlement.creditor == Payer.HUSBAND

    def test_delete(self, settings: Settings) -> None:
        """Should report whether a record was removed."""
        payment = services.add_advance_payment(settings, date(2025, 10, 1), Payer.WIFE, Money(100), "x")

        assert services.delete_advance_payment(settings, payment.id) is True
        assert services.delete_advance_payment(settings, payment.id) is False
