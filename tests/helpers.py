import time

from PyQt6 import QtCore


def finish_worker(scheduler):
    """Join the running fetch and deliver its queued result on this thread."""
    if scheduler.worker is not None:
        scheduler.worker.join(5)
    QtCore.QCoreApplication.processEvents()


def pump_until(predicate, timeout=2.0):
    """Run the event loop until ``predicate()`` holds or ``timeout`` seconds pass."""
    deadline = time.monotonic() + timeout
    while not predicate() and time.monotonic() < deadline:
        QtCore.QCoreApplication.processEvents()
        time.sleep(0.005)
    return predicate()
