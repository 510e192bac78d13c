"""Tests for the invoice aggregation engine."""

import random

import pytest
from decimal import Decimal

from hours_invoice.engine.aggregator import HOURS_TOLERANCE, aggregate, build_invoice
from hours_invoice.models import ParameterError, TimeRecord
from hours_invoice.parsers.duration import parse_duration


def _make_record(project: str = "Acme", hours: str = "1") -> TimeRecord:
    return TimeRecord(project=project, hours=Decimal(hours))


def _mixed_records() -> list[TimeRecord]:
    return [
        TimeRecord("Acme", parse_duration("1:07:13")),
        TimeRecord("Globex", parse_duration("0:00:59")),
        TimeRecord("Acme", parse_duration("2.75")),
        TimeRecord("Initech", parse_duration("0:33:20")),
        TimeRecord("Globex", parse_duration("4:01:01")),
        TimeRecord("Initech", parse_duration("0.1")),
    ]


class TestAggregate:
    def test_empty(self):
        totals = aggregate([])
        assert totals.totals == {}
        assert totals.grand_hours == Decimal("0")

    def test_overlapping_projects(self):
        totals = aggregate([_make_record("p1", "13"), _make_record("p1", "6")])
        assert totals.totals == {"p1": Decimal("19")}
        assert totals.grand_hours == Decimal("19")

    def test_accepts_generator(self):
        totals = aggregate(_make_record("p", str(i)) for i in range(4))
        assert totals.grand_hours == Decimal("6")


class TestBuildInvoice:
    def test_concrete_scenario(self):
        records = [
            TimeRecord("Acme", parse_duration("1:30:00")),
            TimeRecord("Acme", parse_duration("0:30:00")),
            TimeRecord("Globex", parse_duration("2:00:00")),
        ]
        summary = build_invoice(records, 50, 0.05)
        assert summary.per_project == {"Acme": Decimal("2.0"), "Globex": Decimal("2.0")}
        assert summary.grand_hours == Decimal("4.0")
        assert summary.subtotal == Decimal("200.0")
        assert summary.tax_amount == Decimal("10.0")
        assert summary.grand_total == Decimal("210.0")

    def test_manual_hours(self):
        records = [_make_record("test_project_1", "13"), _make_record("test_project_2", "6")]
        summary = build_invoice(records, Decimal("25"), Decimal("0.08"))
        assert summary.per_project == {"test_project_1": Decimal("13"), "test_project_2": Decimal("6")}
        assert summary.grand_hours == Decimal("19")
        assert summary.subtotal == Decimal("475")
        assert summary.tax_amount == Decimal("38")
        assert summary.grand_total == Decimal("513")
        assert summary.pay_rate == Decimal("25")
        assert summary.tax_rate == Decimal("0.08")

    def test_empty_input_is_all_zero(self):
        summary = build_invoice([], 50, 0.05)
        assert summary.per_project == {}
        assert summary.grand_hours == 0
        assert summary.subtotal == 0
        assert summary.tax_amount == 0
        assert summary.grand_total == 0

    def test_default_tax_is_zero(self):
        summary = build_invoice([_make_record(hours="2")], 10)
        assert summary.tax_rate == 0
        assert summary.grand_total == Decimal("20")

    def test_full_precision_kept(self):
        summary = build_invoice([TimeRecord("Acme", parse_duration("0:00:01"))], 1, 0)
        assert summary.grand_hours == Decimal(1) / Decimal(3600)
        assert summary.subtotal != Decimal("0.00")


class TestProperties:
    def test_additivity(self):
        records = _mixed_records()
        summary = build_invoice(records, 1, 0)
        direct = sum((r.hours for r in records), Decimal("0"))
        assert abs(summary.grand_hours - direct) <= HOURS_TOLERANCE
        assert abs(sum(summary.per_project.values(), Decimal("0")) - summary.grand_hours) <= HOURS_TOLERANCE

    @pytest.mark.parametrize("seed", range(5))
    def test_order_insensitive(self, seed):
        records = _mixed_records()
        baseline = build_invoice(records, 40, 0.1)
        shuffled = records[:]
        random.Random(seed).shuffle(shuffled)
        summary = build_invoice(shuffled, 40, 0.1)
        assert abs(summary.grand_hours - baseline.grand_hours) <= HOURS_TOLERANCE
        for project, hours in baseline.per_project.items():
            assert abs(summary.per_project[project] - hours) <= HOURS_TOLERANCE

    def test_zero_tax_identity(self):
        summary = build_invoice(_mixed_records(), 75, 0)
        assert summary.tax_amount == 0
        assert summary.grand_total == summary.subtotal

    def test_linearity_in_rate(self):
        records = [_make_record("a", "1.5"), _make_record("b", "2.25"), _make_record("a", "0.125")]
        single = build_invoice(records, "40", "0.15")
        double = build_invoice(records, "80", "0.15")
        assert double.subtotal == single.subtotal * 2
        assert double.grand_total == single.grand_total * 2

    def test_grand_total_is_subtotal_plus_tax(self):
        summary = build_invoice(_mixed_records(), "33.33", "0.0725")
        assert summary.grand_total == summary.subtotal + summary.tax_amount


class TestParametersValidatedFirst:
    def test_negative_pay_rate(self):
        with pytest.raises(ParameterError, match="pay_rate"):
            build_invoice([_make_record()], -1, 0)

    def test_tax_rate_above_one(self):
        with pytest.raises(ParameterError, match="tax_rate"):
            build_invoice([_make_record()], 10, 10)

    def test_records_not_consumed_on_bad_parameters(self):
        consumed = []

        def records():
            for r in [_make_record(), _make_record()]:
                consumed.append(r)
                yield r

        with pytest.raises(ParameterError):
            build_invoice(records(), 10, -0.5)
        assert consumed == []


class TestPlainNumberHours:
    def test_concrete_scenario_with_float_and_int_hours(self):
        records = [TimeRecord("Acme", 1.5), TimeRecord("Acme", 0.5), TimeRecord("Globex", 2)]
        summary = build_invoice(records, 50, 0.05)
        assert summary.per_project == {"Acme": Decimal("2.0"), "Globex": Decimal("2")}
        assert summary.grand_hours == Decimal("4.0")
        assert summary.subtotal == Decimal("200")
        assert summary.tax_amount == Decimal("10")
        assert summary.grand_total == Decimal("210")
