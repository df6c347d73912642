"""Tests for technician payroll aggregation."""
from datetime import date
from decimal import Decimal

from app.models.payroll_models import UNASSIGNED, PayrollJob
from app.services.payroll_aggregator import aggregate_payroll, technician_key
from conftest import make_job


def _mixed_jobs():
    return [
        make_job("1", "A", "Alice", amount=100, tip=10, fee=5),
        make_job("2", None, "Jane Doe", amount=80.25, tip=0, fee=2.5),
        make_job("3", "B", "Bob", amount=200, tip=20, fee=10),
        make_job("4", "A", "alice ", amount=50, fee=0),
        make_job("5", None, None, amount=40, tip=4),
        make_job("6", "C", "Cara", amount=None, tip=None, fee=None),
    ]


def test_two_technicians_totals_and_order():
    jobs = [
        make_job("1", "A", "Alice", amount=100, fee=5),
        make_job("2", "A", "Alice", amount=50, fee=0),
        make_job("3", "B", "Bob", amount=200, fee=10),
    ]
    report = aggregate_payroll(jobs)

    assert [t.technician_hcp_id for t in report.technicians] == ["B", "A"]
    bob, alice = report.technicians
    assert (alice.job_count, alice.total_revenue, alice.total_cc_fees, alice.net_revenue) == (2, 150, 5, 145)
    assert (bob.job_count, bob.total_revenue, bob.total_cc_fees, bob.net_revenue) == (1, 200, 10, 190)

    totals = report.grand_totals
    assert (totals.job_count, totals.total_revenue, totals.total_cc_fees, totals.net_revenue) == (3, 350, 15, 335)


def test_missing_id_groups_by_name():
    report = aggregate_payroll([make_job("1", None, "Jane Doe", amount=10)])
    assert len(report.technicians) == 1
    assert report.technicians[0].technician_name == "Jane Doe"
    assert report.technicians[0].technician_hcp_id is None
    assert technician_key(report.technicians[0].jobs[0]) == "Jane Doe"


def test_missing_id_and_name_is_unassigned():
    job = make_job("1", None, None, amount=10)
    report = aggregate_payroll([job, make_job("2", "  ", "", amount=5)])
    assert technician_key(job) == UNASSIGNED
    assert len(report.technicians) == 1
    assert report.technicians[0].technician_name == UNASSIGNED
    assert report.technicians[0].job_count == 2


def test_equal_revenue_keeps_first_seen_order():
    report = aggregate_payroll([
        make_job("1", "X", "Xavier", amount=100),
        make_job("2", "Y", "Yara", amount=100),
    ])
    assert [t.technician_name for t in report.technicians] == ["Xavier", "Yara"]


def test_empty_input_gives_zero_report():
    report = aggregate_payroll([])
    assert report.technicians == []
    totals = report.grand_totals
    assert totals.job_count == 0
    assert totals.total_revenue == 0
    assert totals.total_tips == 0
    assert totals.total_cc_fees == 0
    assert totals.net_revenue == 0


def test_null_amounts_count_as_zero():
    report = aggregate_payroll([make_job("1", "A", "Alice", amount=None, tip=None, fee=None)])
    tech = report.technicians[0]
    assert tech.job_count == 1
    assert (tech.total_revenue, tech.total_tips, tech.total_cc_fees, tech.net_revenue) == (0, 0, 0, 0)


def test_identifier_wins_over_differing_names():
    report = aggregate_payroll([
        make_job("1", "A", "Alice Smith", amount=10),
        make_job("2", "A", "ALICE smith ", amount=20),
        make_job("3", "A", None, amount=30),
    ])
    assert len(report.technicians) == 1
    assert report.technicians[0].technician_name == "Alice Smith"
    assert report.technicians[0].job_count == 3


def test_display_name_is_first_non_empty_name():
    report = aggregate_payroll([
        make_job("1", "A", None, amount=10),
        make_job("2", "A", "Alice", amount=20),
        make_job("3", "A", "Alicia", amount=20),
    ])
    assert report.technicians[0].technician_name == "Alice"


def test_tips_excluded_from_net():
    report = aggregate_payroll([make_job("1", "A", "Alice", amount=100, tip=25, fee=3)])
    assert report.technicians[0].total_tips == 25
    assert report.technicians[0].net_revenue == 97
    assert report.grand_totals.net_revenue == 97


def test_counts_and_totals_are_conserved():
    jobs = _mixed_jobs()
    report = aggregate_payroll(jobs)
    techs = report.technicians
    totals = report.grand_totals

    assert sum(t.job_count for t in techs) == len(jobs) == totals.job_count
    assert totals.total_revenue == sum(t.total_revenue for t in techs)
    assert totals.total_tips == sum(t.total_tips for t in techs)
    assert totals.total_cc_fees == sum(t.total_cc_fees for t in techs)
    assert totals.net_revenue == sum(t.net_revenue for t in techs)
    for tech in techs:
        assert tech.net_revenue == tech.total_revenue - tech.total_cc_fees
        assert len(tech.jobs) == tech.job_count


def test_revenue_is_non_increasing():
    revenues = [t.total_revenue for t in aggregate_payroll(_mixed_jobs()).technicians]
    assert revenues == sorted(revenues, reverse=True)


def test_aggregation_is_idempotent_and_does_not_mutate_input():
    jobs = _mixed_jobs()
    before = [job.model_dump() for job in jobs]

    first = aggregate_payroll(jobs)
    second = aggregate_payroll(jobs)

    assert first.model_dump() == second.model_dump()
    assert [job.model_dump() for job in jobs] == before


def test_summary_owns_job_copies_in_input_order():
    jobs = [
        make_job("1", "A", "Alice", amount=10, scheduled_date=date(2026, 2, 2)),
        make_job("2", "B", "Bob", amount=5, scheduled_date=date(2026, 2, 3)),
        make_job("3", "A", "Alice", amount=10, scheduled_date=date(2026, 2, 4)),
    ]
    report = aggregate_payroll(jobs)
    alice = report.technicians[0]

    assert [j.id for j in alice.jobs] == ["1", "3"]
    assert alice.jobs[0] == jobs[0]
    assert alice.jobs[0] is not jobs[0]


def test_fractional_amounts_pass_through_unrounded():
    report = aggregate_payroll([
        PayrollJob(id="1", technician_hcp_id="A", total_amount=10.125, cc_fee_amount=0.375),
    ])
    assert report.technicians[0].total_revenue == 10.125
    assert report.technicians[0].net_revenue == 9.75


def test_cent_amounts_keep_net_totals_exact():
    report = aggregate_payroll([
        make_job("1", "A", "Alice", amount=0.1, fee=0.3),
        make_job("2", "B", "Bob", amount=0.2, fee=0),
        make_job("3", "C", "Cara", amount=0.7, fee=0.1),
        make_job("4", "A", "Alice", amount=19.99, tip=0.01, fee=0.58),
    ])
    techs = report.technicians
    totals = report.grand_totals

    assert totals.net_revenue == sum(t.net_revenue for t in techs)
    assert totals.net_revenue == Decimal("20.01")
    assert totals.total_revenue == Decimal("20.99")
    assert techs[0].net_revenue == Decimal("19.21")


def test_summary_jobs_do_not_share_services_with_input():
    job = make_job("1", "A", "Alice", amount=10, services=[{"name": "Gutter Cleaning"}])
    report = aggregate_payroll([job])

    copied = report.technicians[0].jobs[0]
    copied.services.append({"name": "Window Wash"})
    assert job.services == [{"name": "Gutter Cleaning"}]
