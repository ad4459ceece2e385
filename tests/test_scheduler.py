import unittest

from glossword.engine.scheduler import ManualClock, Scheduler


class SchedulerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scheduler = Scheduler(ManualClock())
        self.calls = []

    def test_runs_in_deadline_then_scheduling_order(self) -> None:
        self.scheduler.call_later(0.3, lambda: self.calls.append("late"))
        self.scheduler.call_soon(lambda: self.calls.append("first"))
        self.scheduler.call_soon(lambda: self.calls.append("second"))
        self.assertEqual(self.scheduler.run_ready(), 2)
        self.assertEqual(self.calls, ["first", "second"])
        self.scheduler.advance(0.3)
        self.assertEqual(self.calls, ["first", "second", "late"])

    def test_cancelled_handles_never_run(self) -> None:
        handle = self.scheduler.call_soon(lambda: self.calls.append("x"))
        self.scheduler.cancel(handle)
        self.assertEqual(self.scheduler.pending, 0)
        self.assertEqual(self.scheduler.run_ready(), 0)
        self.assertEqual(self.calls, [])

    def test_callbacks_scheduled_while_running_run_in_same_pass(self) -> None:
        def outer() -> None:
            self.calls.append("outer")
            self.scheduler.call_soon(lambda: self.calls.append("inner"))

        self.scheduler.call_soon(outer)
        self.assertEqual(self.scheduler.run_ready(), 2)
        self.assertEqual(self.calls, ["outer", "inner"])

    def test_advance_requires_manual_clock(self) -> None:
        with self.assertRaises(TypeError):
            Scheduler().advance(1.0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
