from __future__ import annotations

import threading

import pytest

from relay_eventlog.domain import DeliveryCounters, DeliveryStats, DropReason, ServiceState


def test_counters_start_at_zero() -> None:
    assert DeliveryCounters().snapshot() == DeliveryStats()


def test_snapshot_reflects_each_counter() -> None:
    counters = DeliveryCounters()
    counters.note_accepted()
    counters.note_accepted()
    counters.note_written()
    counters.note_write_failure()
    counters.note_dropped(DropReason.QUEUE_FULL)
    counters.note_dropped(DropReason.NOT_RUNNING)
    counters.note_dropped(DropReason.NOT_RUNNING)

    stats = counters.snapshot()

    assert stats == DeliveryStats(
        accepted=2,
        written=1,
        dropped_queue_full=1,
        dropped_not_running=2,
        write_failures=1,
    )
    assert stats.dropped == 3
    assert stats.pending == 0


def test_snapshot_is_immutable() -> None:
    stats = DeliveryCounters().snapshot()
    with pytest.raises(AttributeError):
        stats.accepted = 5  # type: ignore[misc]


def test_counters_are_thread_safe() -> None:
    counters = DeliveryCounters()

    def bump() -> None:
        for _ in range(1000):
            counters.note_accepted()

    threads = [threading.Thread(target=bump) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert counters.snapshot().accepted == 8000


def test_drop_reason_labels_are_stable() -> None:
    assert [reason.value for reason in DropReason] == ["queue_full", "not_running"]


@pytest.mark.parametrize(
    ("state", "accepts"),
    [
        (ServiceState.UNINITIALIZED, False),
        (ServiceState.RUNNING, True),
        (ServiceState.CLOSED, False),
    ],
)
def test_only_running_state_accepts_events(state: ServiceState, accepts: bool) -> None:
    assert state.accepts_events is accepts
