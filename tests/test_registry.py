"""Tests for the idle/capacity-bounded session registry."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from companion.registry import Registry


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _registry(max_entries=10, idle_ttl=60.0, evicted=None):
    clock = FakeClock()
    on_evict = evicted.append if evicted is not None else None
    return Registry("test", max_entries=max_entries, idle_ttl=idle_ttl,
                    on_evict=on_evict, clock=clock), clock


class TestRegistry:
    def test_add_get_remove(self):
        reg, _ = _registry()
        entry_id = reg.add("a")
        assert len(entry_id) == 24
        assert reg.get(entry_id) == "a"
        assert reg.remove(entry_id) == "a"
        assert reg.get(entry_id) is None
        assert reg.remove(entry_id) is None

    def test_idle_entries_evicted(self):
        evicted = []
        reg, clock = _registry(idle_ttl=60.0, evicted=evicted)
        old = reg.add("old")
        clock.now += 30
        fresh = reg.add("fresh")

        clock.now += 45
        assert reg.get(old) is None
        assert reg.get(fresh) == "fresh"
        assert evicted == ["old"]

    def test_lookup_refreshes_entry(self):
        reg, clock = _registry(idle_ttl=60.0)
        entry_id = reg.add("chat")
        for _ in range(5):
            clock.now += 50
            assert reg.get(entry_id) == "chat"

    def test_capacity_drops_least_recently_used(self):
        evicted = []
        reg, clock = _registry(max_entries=3, evicted=evicted)
        ids = []
        for name in ("a", "b", "c"):
            ids.append(reg.add(name))
            clock.now += 1
        reg.get(ids[0])  # "a" becomes most recently used

        reg.add("d")
        assert len(reg) == 3
        assert evicted == ["b"]
        assert ids[1] not in reg
        assert ids[0] in reg

    def test_many_registrations_stay_bounded(self):
        reg, _ = _registry(max_entries=20)
        for i in range(50):
            reg.add(i)
        assert len(reg) == 20
        assert sorted(reg.snapshot().values()) == list(range(30, 50))
