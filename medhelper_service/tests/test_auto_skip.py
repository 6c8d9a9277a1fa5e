import unittest

from medhelper.core.config import AUTO_SKIP_REASON
from medhelper.services.auto_skip import find_auto_skips, run_auto_skip
from medhelper.services.catalog import CatalogStore
from medhelper.services.log_store import LogStore
from medhelper.services.projection import project_doses_for_date

from factories import TODAY, clock_at, make_log, make_med, paracetamol


class TestFindAutoSkips(unittest.TestCase):
    def test_skips_only_doses_with_due_successor(self):
        out = find_auto_skips([paracetamol()], [], TODAY, clock_at("14:30"))
        # 12:00 is missed but its successor (16:00) is still upcoming
        self.assertEqual([lg.scheduled_time for lg in out], ["08:00"])

        lg = out[0]
        self.assertEqual(lg.status, "skipped")
        self.assertEqual(lg.medication_id, "med1")
        self.assertEqual(lg.scheduled_date, TODAY)
        self.assertEqual(lg.skip_reason, AUTO_SKIP_REASON)
        self.assertEqual(lg.actual_time, "14:30")

    def test_successor_due_now(self):
        out = find_auto_skips([paracetamol()], [], TODAY, clock_at("16:00"))
        self.assertEqual([lg.scheduled_time for lg in out], ["08:00", "12:00"])

    def test_successor_current(self):
        med = make_med("m", ["08:00", "09:00"], frequency="twice")
        out = find_auto_skips([med], [], TODAY, clock_at("10:01"))
        self.assertEqual([lg.scheduled_time for lg in out], ["08:00"])

    def test_last_slot_never_skipped(self):
        out = find_auto_skips([paracetamol()], [], TODAY, clock_at("23:59"))
        self.assertEqual([lg.scheduled_time for lg in out], ["08:00", "12:00", "16:00"])

        once = make_med("once", ["08:00"], frequency="once")
        self.assertEqual(find_auto_skips([once], [], TODAY, clock_at("23:59")), [])

    def test_logged_dose_left_alone(self):
        logs = [make_log("med1", "08:00", "taken")]
        self.assertEqual(find_auto_skips([paracetamol()], logs, TODAY, clock_at("14:30")), [])

    def test_yesterdays_log_does_not_count(self):
        logs = [make_log("med1", "08:00", "taken", date="2026-10-18")]
        out = find_auto_skips([paracetamol()], logs, TODAY, clock_at("14:30"))
        self.assertEqual(len(out), 1)

    def test_schedule_order_independent_of_storage_order(self):
        med = make_med("m", ["16:00", "08:00", "12:00"], frequency="thrice")
        out = find_auto_skips([med], [], TODAY, clock_at("16:00"))
        self.assertEqual([lg.scheduled_time for lg in out], ["08:00", "12:00"])

    def test_as_needed_ignored(self):
        prn = make_med("prn", [], frequency="asNeeded")
        self.assertEqual(find_auto_skips([prn], [], TODAY, clock_at("23:00")), [])


class TestRunAutoSkip(unittest.TestCase):
    def setUp(self):
        self.catalog = CatalogStore([paracetamol()])
        self.logs = LogStore()
        self.clock = clock_at("14:30")

    def test_idempotent(self):
        first = run_auto_skip(self.catalog, self.logs, self.clock)
        second = run_auto_skip(self.catalog, self.logs, self.clock)
        self.assertEqual(len(first), 1)
        self.assertEqual(second, [])
        self.assertEqual(len(self.logs), 1)

    def test_projection_after_skip(self):
        run_auto_skip(self.catalog, self.logs, self.clock)
        doses = project_doses_for_date(self.catalog.list(), self.logs.list(), TODAY, "14:30")
        self.assertEqual([d.status for d in doses], ["skipped", "missed", "upcoming", "upcoming"])
