import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from idworker import (
    ClockMovedBackwardsError,
    IdWorker,
    InvalidIdentityError,
    ManualClock,
    parse_id,
)
from idworker.constants import TWEPOCH

from .conftest import T0


def test_every_valid_identity_is_accepted():
    for worker_id in range(32):
        for datacenter_id in range(32):
            w = IdWorker(worker_id, datacenter_id)
            assert (w.worker_id, w.datacenter_id) == (worker_id, datacenter_id)


@pytest.mark.parametrize("worker_id,datacenter_id", [
    (-1, 0), (32, 0), (0, -1), (0, 32), (1000, 1000), (-5, 40),
])
def test_out_of_range_identity_is_rejected(worker_id, datacenter_id):
    with pytest.raises(InvalidIdentityError):
        IdWorker(worker_id, datacenter_id)


@pytest.mark.parametrize("bad", ["1", 1.0, True, None])
def test_non_integer_identity_is_rejected(bad):
    with pytest.raises(InvalidIdentityError) as exc:
        IdWorker(bad, 0)
    assert exc.value.field == "worker Id"
    assert isinstance(exc.value, ValueError)


def test_error_message_names_the_limit():
    with pytest.raises(InvalidIdentityError, match="datacenter Id can't be greater than 31"):
        IdWorker(0, 32)


@pytest.mark.parametrize("bad", [-1, 4096, "3", 2.0, True])
def test_out_of_range_starting_sequence_is_rejected(bad):
    with pytest.raises(ValueError, match="sequence can't be greater than 4095"):
        IdWorker(1, 1, sequence=bad)


def test_highest_starting_sequence_is_kept():
    assert IdWorker(1, 1, sequence=4095).sequence == 4095


def test_fresh_worker_state():
    w = IdWorker(1, 2, sequence=9)
    assert w.last_timestamp == -1
    assert w.sequence == 9
    assert w.epoch == TWEPOCH


def test_first_id_starts_a_new_sequence(worker, clock):
    first = parse_id(worker.next_id())
    assert first.sequence == 0
    assert first.timestamp == T0
    assert worker.last_timestamp == T0


def test_ids_carry_identity(worker):
    decoded = worker.parse(worker.next_id())
    assert decoded.worker_id == 3
    assert decoded.datacenter_id == 7


def test_ids_strictly_increase_with_non_decreasing_clock(worker, clock):
    previous = -1
    for i in range(10_000):
        if i % 3 == 0:
            clock.advance(i % 2)
        current = worker.next_id()
        assert current > previous
        previous = current


def test_hundred_thousand_ids_are_distinct(worker, clock):
    ids = set()
    for i in range(100_000):
        if i % 7 == 0:
            clock.advance()
        ids.add(worker.next_id())
    assert len(ids) == 100_000


def test_hundred_thousand_ids_are_distinct_on_the_real_clock():
    w = IdWorker(0, 0)
    assert len({w.next_id() for _ in range(100_000)}) == 100_000


def test_sequence_runs_through_the_millisecond_then_waits(worker, clock):
    sequences = [parse_id(worker.next_id()) for _ in range(4096)]
    assert [s.sequence for s in sequences] == list(range(4096))
    assert {s.timestamp for s in sequences} == {T0}

    clock.after_polls(5, T0 + 1)
    polls_before = clock.polls
    rolled = parse_id(worker.next_id())

    assert rolled.sequence == 0
    assert rolled.timestamp == T0 + 1
    assert clock.polls - polls_before == 5
    assert worker.last_timestamp == T0 + 1


def test_new_millisecond_resets_sequence(worker, clock):
    worker.next_id()
    worker.next_id()
    assert worker.sequence == 1
    clock.advance(10)
    assert parse_id(worker.next_id()).sequence == 0


def test_backwards_clock_is_rejected(worker, clock):
    worker.next_id()
    clock.set(T0 - 1000)
    with pytest.raises(ClockMovedBackwardsError) as exc:
        worker.next_id()
    assert exc.value.offset == 1000
    assert exc.value.last_timestamp == T0
    assert exc.value.timestamp == T0 - 1000
    assert "1000 milliseconds" in str(exc.value)
    assert worker.last_timestamp == T0


def test_worker_recovers_once_clock_catches_up(worker, clock):
    worker.next_id()
    clock.set(T0 - 5)
    with pytest.raises(ClockMovedBackwardsError):
        worker.next_id()
    clock.set(T0)
    decoded = parse_id(worker.next_id())
    assert decoded.timestamp == T0
    assert decoded.sequence == 1


def test_backwards_clock_is_logged(worker, clock, caplog):
    worker.next_id()
    clock.set(T0 - 1)
    with caplog.at_level(logging.ERROR, logger="idworker.worker"):
        with pytest.raises(ClockMovedBackwardsError):
            worker.next_id()
    assert "moving backwards" in caplog.text


def test_issued_ids_are_logged_when_enabled(worker, caplog):
    worker.log_ids = True
    with caplog.at_level(logging.DEBUG, logger="idworker.worker"):
        snowflake_id = worker.next_id()
    assert str(snowflake_id) in caplog.text


def test_default_manual_clock_starts_at_the_epoch():
    w = IdWorker(1, 2, clock=ManualClock())
    snowflake_id = w.next_id()
    assert snowflake_id >= 0
    assert w.parse(snowflake_id) == (TWEPOCH, 2, 1, 0)


def test_ids_from_a_clock_behind_the_epoch_round_trip():
    w = IdWorker(1, 2, clock=ManualClock(TWEPOCH - 60_000))
    decoded = w.parse(w.next_id())
    assert (decoded.timestamp, decoded.datacenter_id, decoded.worker_id) == (TWEPOCH - 60_000, 2, 1)
    assert decoded.sequence == 0


def test_plain_callable_clock():
    w = IdWorker(1, 1, clock=lambda: T0 + 42)
    assert parse_id(w.next_id()).timestamp == T0 + 42


def test_unusable_clock_is_rejected():
    with pytest.raises(TypeError):
        IdWorker(1, 1, clock=12345)


def test_custom_epoch():
    clock = ManualClock(T0)
    w = IdWorker(2, 2, clock=clock, epoch=T0)
    snowflake_id = w.next_id()
    assert snowflake_id >> 22 == 0
    assert w.parse(snowflake_id).timestamp == T0


def test_workers_with_different_identities_never_collide(clock):
    a = IdWorker(1, 0, clock=clock)
    b = IdWorker(2, 0, clock=clock)
    ids_a = {a.next_id() for _ in range(1000)}
    ids_b = {b.next_id() for _ in range(1000)}
    assert not ids_a & ids_b


def test_concurrent_callers_get_distinct_ids():
    w = IdWorker(5, 5)
    threads, per_thread = 8, 5000

    def grab(_):
        return [w.next_id() for _ in range(per_thread)]

    with ThreadPoolExecutor(max_workers=threads) as pool:
        batches = list(pool.map(grab, range(threads)))

    everything = [i for batch in batches for i in batch]
    assert len(set(everything)) == threads * per_thread
    for batch in batches:
        assert batch == sorted(batch)
