import threading
import time
import unittest
from datetime import datetime, timezone
from unittest import mock

from backend.app.schemas import AlertCreate, AlertStatus, Classification, RiskLevel, SubmissionCreate
from backend.app import store
from backend.app.store import (
    InMemoryRepository,
    build_alert,
    build_submission,
    get_alert_store,
    get_submission_store,
    reset_stores,
)


class TestInMemoryRepository(unittest.TestCase):

    def test_append_prepend_order(self):
        repo = InMemoryRepository([2])
        repo.append(3)
        repo.prepend(1)
        self.assertEqual(repo.list(), [1, 2, 3])
        self.assertEqual(len(repo), 3)

    def test_list_returns_a_copy(self):
        repo = InMemoryRepository([1])
        snapshot = repo.list()
        snapshot.append(99)
        self.assertEqual(repo.list(), [1])

    def test_filter(self):
        repo = InMemoryRepository(range(10))
        self.assertEqual(repo.filter(lambda x: x % 3 == 0), [0, 3, 6, 9])

    def test_concurrent_appends_are_not_lost(self):
        repo = InMemoryRepository()

        def worker():
            for i in range(200):
                repo.append(i)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(len(repo), 1600)


class TestRecordBuilders(unittest.TestCase):

    def test_submission_defaults(self):
        s = build_submission(
            SubmissionCreate(district="dadu", classification=Classification.CLEAN, confidence=0.9)
        )
        self.assertTrue(s.id.startswith("sub_"))
        self.assertEqual(s.coordinates, (0.0, 0.0))
        self.assertEqual(s.submitted_by, "Anonymous")
        self.assertEqual(s.notes, "")
        self.assertIsNotNone(s.timestamp.tzinfo)

    def test_submission_keeps_supplied_fields(self):
        ts = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
        s = build_submission(
            SubmissionCreate(
                district="dadu",
                classification=Classification.UNSAFE,
                confidence=0.9,
                geo={"lat": 26.7, "lng": 67.8},
                timestamp=ts,
                submittedBy="NGO volunteer",
                notes="Canal water",
            )
        )
        self.assertEqual(s.coordinates, (26.7, 67.8))
        self.assertEqual(s.timestamp, ts)
        self.assertEqual(s.submitted_by, "NGO volunteer")

    def test_ids_are_unique(self):
        payload = SubmissionCreate(district="dadu", classification=Classification.CLEAN, confidence=0.9)
        ids = {build_submission(payload).id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_alert_defaults(self):
        a = build_alert(AlertCreate(district="karachi", cause="Sewage leak", message="Boil all tap water today."))
        self.assertTrue(a.id.startswith("alert-"))
        self.assertEqual(a.status, AlertStatus.ACTIVE)
        self.assertEqual(a.risk, RiskLevel.MEDIUM)
        self.assertEqual(a.ttl, 24)
        self.assertAlmostEqual(a.confidence, 0.8)


class TestSeededStores(unittest.TestCase):

    def setUp(self):
        reset_stores()

    def tearDown(self):
        reset_stores()

    def test_seed_data(self):
        self.assertEqual([s.id for s in get_submission_store().list()], ["sub_001", "sub_002"])
        self.assertEqual([a.id for a in get_alert_store().list()], ["alert-1", "alert-2", "alert-3", "alert-4"])

    def test_stores_are_singletons(self):
        self.assertIs(get_submission_store(), get_submission_store())
        self.assertIs(get_alert_store(), get_alert_store())

    def test_first_access_from_two_threads_keeps_both_records(self):
        seed = store.default_submissions
        calls = []

        def slow_seed():
            calls.append(1)
            time.sleep(0.05)
            return seed()

        payload = SubmissionCreate(district="dadu", classification=Classification.CLEAN, confidence=0.9)
        barrier = threading.Barrier(2)
        created = []

        def worker():
            barrier.wait()
            created.append(get_submission_store().append(build_submission(payload)).id)

        with mock.patch.object(store, "default_submissions", slow_seed):
            threads = [threading.Thread(target=worker) for _ in range(2)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        ids = [s.id for s in get_submission_store().list()]
        self.assertEqual(len(calls), 1)
        self.assertEqual(len(ids), 4)
        for sub_id in created:
            self.assertIn(sub_id, ids)


if __name__ == '__main__':
    unittest.main()
