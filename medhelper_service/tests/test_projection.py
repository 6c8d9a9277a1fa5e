import unittest

from medhelper.services.projection import (
    find_log, group_by_status, group_by_time, project_doses_for_date,
)

from factories import TODAY, make_log, make_med, paracetamol


class TestProjection(unittest.TestCase):
    def test_paracetamol_at_1430(self):
        doses = project_doses_for_date([paracetamol()], [], TODAY, "14:30")
        self.assertEqual([d.time for d in doses], ["08:00", "12:00", "16:00", "20:00"])
        self.assertEqual([d.status for d in doses], ["missed", "missed", "upcoming", "upcoming"])
        self.assertEqual(doses[0].dose_id, "med1_08:00")
        self.assertEqual(doses[0].name, "Paracetamol 500mg")

    def test_as_needed_never_projected(self):
        prn = make_med("prn", [], frequency="asNeeded")
        self.assertEqual(project_doses_for_date([prn], [], TODAY, "10:00"), [])

    def test_log_is_authoritative(self):
        logs = [make_log("med1", "08:00", "taken")]
        for current in ("07:00", "08:00", "23:59"):
            doses = project_doses_for_date([paracetamol()], logs, TODAY, current)
            self.assertEqual(doses[0].status, "taken")
            self.assertEqual(doses[0].log_id, "log_x")

    def test_log_for_other_day_ignored(self):
        logs = [make_log("med1", "08:00", "taken", date="2026-10-18")]
        doses = project_doses_for_date([paracetamol()], logs, TODAY, "14:30")
        self.assertEqual(doses[0].status, "missed")

    def test_first_duplicate_wins(self):
        logs = [
            make_log("med1", "08:00", "skipped", log_id="log_a"),
            make_log("med1", "08:00", "taken", log_id="log_b"),
        ]
        self.assertEqual(find_log(logs, "med1", "08:00", TODAY).id, "log_a")
        doses = project_doses_for_date([paracetamol()], logs, TODAY, "14:30")
        self.assertEqual(doses[0].status, "skipped")

    def test_stable_sort_keeps_catalog_order(self):
        a = make_med("a", ["20:00", "08:00"], frequency="twice")
        b = make_med("b", ["08:00"], frequency="once")
        doses = project_doses_for_date([a, b], [], TODAY, "07:00")
        self.assertEqual([d.dose_id for d in doses], ["a_08:00", "b_08:00", "a_20:00"])


class TestGrouping(unittest.TestCase):
    def setUp(self):
        meds = [paracetamol(), make_med("med2", ["08:00", "14:00", "20:00"], frequency="thrice")]
        logs = [make_log("med2", "08:00", "taken")]
        self.doses = project_doses_for_date(meds, logs, TODAY, "14:30")

    def test_group_by_status(self):
        groups = group_by_status(self.doses)
        self.assertEqual(list(groups), ["upcoming", "taken", "missed"])
        self.assertEqual(
            [(d.dose_id, d.status) for d in groups["upcoming"]],
            [("med2_14:00", "current"), ("med1_16:00", "upcoming"),
             ("med1_20:00", "upcoming"), ("med2_20:00", "upcoming")],
        )
        self.assertEqual([d.dose_id for d in groups["taken"]], ["med2_08:00"])
        self.assertEqual([d.dose_id for d in groups["missed"]], ["med1_08:00", "med1_12:00"])

    def test_group_by_time(self):
        clusters = group_by_time(group_by_status(self.doses)["upcoming"])
        self.assertEqual([t for t, _ in clusters], ["14:00", "16:00", "20:00"])
        self.assertEqual([d.medication_id for d in clusters[-1][1]], ["med1", "med2"])

    def test_empty(self):
        self.assertEqual(group_by_status([]), {})
        self.assertEqual(group_by_time([]), [])
