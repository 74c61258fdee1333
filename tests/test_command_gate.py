import sys
import threading
import time
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from streamleech.ui.preferences import CommandGate


class _ReporterStub:
    def __init__(self, fail: bool = False) -> None:
        self.reported: list[BaseException] = []
        self.fail = fail

    def show_and_log_exception(self, exc: BaseException) -> None:
        self.reported.append(exc)
        if self.fail:
            raise RuntimeError("reporter broke")


class CommandGateTests(unittest.TestCase):
    def test_returns_operation_result(self) -> None:
        gate = CommandGate(_ReporterStub())
        self.assertEqual(gate.run_exclusive(lambda: 42), 42)

    def test_failure_is_reported_and_lock_released(self) -> None:
        reporter = _ReporterStub()
        gate = CommandGate(reporter)

        def _boom() -> None:
            raise ValueError("bad draft")

        with self.assertLogs("streamleech", level="ERROR"):
            self.assertIsNone(gate.run_exclusive(_boom, name="boom"))
        self.assertEqual(len(reporter.reported), 1)
        self.assertIsInstance(reporter.reported[0], ValueError)

        ran = []
        worker = threading.Thread(target=lambda: gate.run_exclusive(lambda: ran.append(True)))
        worker.start()
        worker.join(timeout=2)
        self.assertEqual(ran, [True])

    def test_failing_reporter_does_not_escape(self) -> None:
        reporter = _ReporterStub(fail=True)
        gate = CommandGate(reporter)

        def _boom() -> None:
            raise ValueError("bad draft")

        with self.assertLogs("streamleech", level="ERROR"):
            gate.run_exclusive(_boom)
        self.assertEqual(len(reporter.reported), 1)

    def test_same_thread_reentry_is_allowed(self) -> None:
        gate = CommandGate(_ReporterStub())
        self.assertEqual(gate.run_exclusive(lambda: gate.run_exclusive(lambda: "inner")), "inner")

    def test_commands_from_threads_never_overlap(self) -> None:
        gate = CommandGate(_ReporterStub())
        active = [0]
        peak = [0]

        def _op() -> None:
            active[0] += 1
            peak[0] = max(peak[0], active[0])
            time.sleep(0.01)
            active[0] -= 1

        workers = [threading.Thread(target=lambda: gate.run_exclusive(_op)) for _ in range(6)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join(timeout=5)
        self.assertEqual(peak[0], 1)
        self.assertEqual(active[0], 0)

    def test_reservation_admits_one_pending_command(self) -> None:
        gate = CommandGate(_ReporterStub())
        self.assertTrue(gate.try_reserve("undo"))
        self.assertEqual(gate.pending, "undo")
        self.assertFalse(gate.try_reserve("defaults"))

        gate.release("defaults")
        self.assertEqual(gate.pending, "undo")
        gate.release("undo")
        self.assertIsNone(gate.pending)
        self.assertTrue(gate.try_reserve("defaults"))


if __name__ == "__main__":
    unittest.main()
