import logging

from netplan_layers.core.events import EventLog


def test_record_appends_structured_event():
    log = EventLog()
    entry = log.record("fragments_loaded", fragments=["a.yaml"])

    assert list(log.events) == [entry]
    assert entry["event"] == "fragments_loaded"
    assert entry["level"] == "INFO"
    assert entry["fragments"] == ["a.yaml"]
    assert entry["timestamp"].endswith("+00:00")


def test_record_mirrors_to_logger(caplog):
    log = EventLog(logger=logging.getLogger("netplan_layers.test"))
    with caplog.at_level(logging.DEBUG, logger="netplan_layers.test"):
        log.record("flush_failed", level="ERROR", fragment="b.yaml")

    assert caplog.records[-1].levelno == logging.ERROR
    assert "flush_failed" in caplog.records[-1].getMessage()


def test_event_log_keeps_only_most_recent_events():
    log = EventLog(maxlen=3)
    for i in range(5):
        log.record("entity_set", seq=i)

    assert [e["seq"] for e in log.events] == [2, 3, 4]


def test_event_log_unbounded_when_maxlen_is_none():
    log = EventLog(maxlen=None)
    for i in range(50):
        log.record("entity_set", seq=i)

    assert len(log.events) == 50


def test_store_event_window_is_configurable(make_store, base_fragments):
    store = make_store(base_fragments, max_events=2)
    for i in range(5):
        store.set_entity("ethernets", "eth0", {"mtu": 1500 + i})

    assert [e["event"] for e in store.events] == ["entity_set", "entity_set"]
    assert store.events[-1]["plan_hash"] == store.plan_hash()
