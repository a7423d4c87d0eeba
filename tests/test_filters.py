import unittest
from datetime import date, datetime, timedelta, timezone

from backend.app.errors import ValidationError
from backend.app.filters import (
    AlertFilters,
    SubmissionFilters,
    aggregate_alerts,
    aggregate_submissions,
    district_breakdown,
    filter_alerts,
    filter_submissions,
    parse_bbox,
    parse_classification,
    parse_datetime,
    parse_enum,
)
from backend.app.schemas import AlertStatus, Classification, RiskLevel, SubmissionCreate
from backend.app.store import build_submission, default_alerts, default_submissions


class TestSubmissionFilters(unittest.TestCase):

    def setUp(self):
        self.items = default_submissions()
        self.extra = build_submission(
            SubmissionCreate(
                district="sukkur",
                classification=Classification.NEEDS_TESTING,
                confidence=0.7,
                geo={"lat": 27.7, "lng": 68.85},
                timestamp=datetime(2024, 2, 1, tzinfo=timezone.utc),
                submitted_by="Teacher",
                notes="Hand pump near school",
            )
        )
        self.items.append(self.extra)

    def ids(self, items):
        return [s.id for s in items]

    def test_no_filters_returns_everything(self):
        self.assertEqual(filter_submissions(self.items, SubmissionFilters()), self.items)

    def test_district_all_means_no_filter(self):
        self.assertEqual(len(filter_submissions(self.items, SubmissionFilters(district="all"))), 3)

    def test_district_exact_match(self):
        out = filter_submissions(self.items, SubmissionFilters(district="Karachi"))
        self.assertEqual(self.ids(out), ["sub_001"])

    def test_classification(self):
        out = filter_submissions(self.items, SubmissionFilters(classification=Classification.UNSAFE))
        self.assertEqual(self.ids(out), ["sub_002"])

    def test_date_range_is_inclusive(self):
        f = SubmissionFilters(
            date_from=datetime(2024, 1, 14, 15, 45, tzinfo=timezone.utc),
            date_to=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        )
        self.assertEqual(sorted(self.ids(filter_submissions(self.items, f))), ["sub_001", "sub_002"])

    def test_naive_dates_are_treated_as_utc(self):
        f = SubmissionFilters(date_from=datetime(2024, 1, 15))
        self.assertEqual(self.ids(filter_submissions(self.items, f)), ["sub_001", self.extra.id])

    def test_recent_days(self):
        now = datetime(2024, 2, 3, tzinfo=timezone.utc)
        out = filter_submissions(self.items, SubmissionFilters(recent_days=7), now=now)
        self.assertEqual(self.ids(out), [self.extra.id])

    def test_bbox_is_inclusive(self):
        # exactly on the karachi sample's corner
        f = SubmissionFilters(bbox=(67.0099, 24.8615, 68.0, 25.0))
        self.assertEqual(self.ids(filter_submissions(self.items, f)), ["sub_001"])

    def test_search_is_case_insensitive(self):
        out = filter_submissions(self.items, SubmissionFilters(search="POST-FLOOD"))
        self.assertEqual(self.ids(out), ["sub_002"])
        out = filter_submissions(self.items, SubmissionFilters(search="teacher"))
        self.assertEqual(self.ids(out), [self.extra.id])

    def test_predicates_are_and_combined(self):
        f = SubmissionFilters(district="karachi", classification=Classification.UNSAFE)
        self.assertEqual(filter_submissions(self.items, f), [])

    def test_filter_is_idempotent(self):
        filters = [
            SubmissionFilters(district="hyderabad"),
            SubmissionFilters(classification=Classification.CLEAN, search="municipal"),
            SubmissionFilters(bbox=(60.0, 20.0, 70.0, 30.0)),
            SubmissionFilters(date_from=datetime(2024, 1, 15, tzinfo=timezone.utc)),
        ]
        for f in filters:
            once = filter_submissions(self.items, f)
            self.assertEqual(filter_submissions(once, f), once)


class TestParsing(unittest.TestCase):

    def test_parse_bbox(self):
        self.assertEqual(parse_bbox("66,24,68,26"), (66.0, 24.0, 68.0, 26.0))
        self.assertIsNone(parse_bbox(None))
        self.assertIsNone(parse_bbox(""))

    def test_parse_bbox_rejects_bad_input(self):
        with self.assertRaises(ValidationError):
            parse_bbox("1,2,3")
        with self.assertRaises(ValidationError):
            parse_bbox("a,b,c,d")

    def test_parse_classification_aliases(self):
        self.assertEqual(parse_classification("testing"), Classification.NEEDS_TESTING)
        self.assertEqual(parse_classification("Needs Testing"), Classification.NEEDS_TESTING)
        self.assertEqual(parse_classification("unsafe"), Classification.UNSAFE)
        self.assertIsNone(parse_classification("all"))
        with self.assertRaises(ValidationError):
            parse_classification("murky")

    def test_parse_datetime(self):
        self.assertEqual(
            parse_datetime("2024-01-15T10:30:00Z", "from"),
            datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        )
        with self.assertRaises(ValidationError):
            parse_datetime("yesterday", "from")

    def test_parse_enum(self):
        self.assertEqual(parse_enum(RiskLevel, "HIGH", "risk"), RiskLevel.HIGH)
        self.assertIsNone(parse_enum(AlertStatus, "all", "status"))
        with self.assertRaises(ValidationError):
            parse_enum(AlertStatus, "expired", "status")


class TestAggregation(unittest.TestCase):

    def test_default_submissions(self):
        counts = aggregate_submissions(default_submissions())
        self.assertEqual(counts["total"], 2)
        self.assertEqual(counts["unsafe"], 1)
        self.assertEqual(counts["clean"], 1)
        self.assertEqual(counts["testing"], 0)
        self.assertEqual(counts["districts"], 2)

    def test_empty(self):
        self.assertEqual(
            aggregate_submissions([]),
            {"total": 0, "clean": 0, "testing": 0, "unsafe": 0, "districts": 0},
        )
        self.assertEqual(district_breakdown([]), [])

    def test_district_breakdown(self):
        rows = district_breakdown(default_submissions())
        self.assertEqual([r["district"] for r in rows], ["hyderabad", "karachi"])
        self.assertEqual(rows[0], {"district": "hyderabad", "total": 1, "clean": 0, "testing": 0, "unsafe": 1})
        self.assertEqual(rows[1]["clean"], 1)


class TestAlertFilters(unittest.TestCase):

    def setUp(self):
        self.now = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
        self.items = default_alerts(now=self.now)

    def ids(self, items):
        return [a.id for a in items]

    def test_search_matches_district_or_cause(self):
        self.assertEqual(self.ids(filter_alerts(self.items, AlertFilters(search="karachi"))), ["alert-1"])
        self.assertEqual(self.ids(filter_alerts(self.items, AlertFilters(search="FLOOD"))), ["alert-2"])

    def test_status_and_risk(self):
        f = AlertFilters(status=AlertStatus.RESOLVED, risk=RiskLevel.HIGH)
        self.assertEqual(self.ids(filter_alerts(self.items, f)), ["alert-4"])

    def test_district(self):
        self.assertEqual(self.ids(filter_alerts(self.items, AlertFilters(district="sukkur"))), ["alert-3"])

    def test_idempotent(self):
        f = AlertFilters(status=AlertStatus.ACTIVE)
        once = filter_alerts(self.items, f)
        self.assertEqual(filter_alerts(once, f), once)

    def test_aggregate_alerts(self):
        counts = aggregate_alerts(self.items, today=self.now.date())
        self.assertEqual(counts["total"], 4)
        self.assertEqual(counts["active"], 2)
        self.assertEqual(counts["resolved"], 2)
        self.assertEqual(counts["high_risk"], 2)
        self.assertEqual(counts["issued_today"], 0)
        self.assertEqual(counts["districts"], 4)

    def test_issued_today(self):
        counts = aggregate_alerts(self.items, today=(self.now - timedelta(days=1)).date())
        self.assertEqual(counts["issued_today"], 1)

    def test_aggregate_alerts_empty(self):
        self.assertEqual(aggregate_alerts([], today=date(2024, 1, 1))["total"], 0)


if __name__ == '__main__':
    unittest.main()
