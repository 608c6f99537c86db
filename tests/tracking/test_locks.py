import threading

from worktime_tracker.tracking.locks import KeyedLock


def test_different_keys_do_not_block():
    locks = KeyedLock()
    done = threading.Event()

    def other():
        with locks.hold(2):
            done.set()

    with locks.hold(1):
        t = threading.Thread(target=other)
        t.start()
        assert done.wait(timeout=2)
        t.join()


def test_same_key_is_exclusive():
    locks = KeyedLock()
    entered = threading.Event()

    def other():
        with locks.hold(1):
            entered.set()

    with locks.hold(1):
        t = threading.Thread(target=other)
        t.start()
        assert not entered.wait(timeout=0.2)

    t.join(timeout=2)
    assert entered.is_set()


def test_idle_entries_are_released():
    locks = KeyedLock()
    with locks.hold("a"):
        with locks.hold("b"):
            assert len(locks) == 2
    assert len(locks) == 0
