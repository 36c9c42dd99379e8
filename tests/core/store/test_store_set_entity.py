# tests/core/store/test_store_set_entity.py
"""
Testes da escrita pontual de entidades (`set_entity`).

Os testes asseguram que:
- a escrita vai para o fragmento dono (entidade → categoria → primeiro)
- o fragmento alterado é marcado como sujo
- o plano reflete a escrita imediatamente (read-after-write)
- escrever sem fragmentos levanta `NoFragmentsError`

Decisões arquiteturais:
    - `None` sobrescreve o valor existente; nenhuma chave é removida
    - listas seguem a política de merge da Store
"""

import pytest

from netplan_layers.core.exceptions import NoFragmentsError
from netplan_layers.core.merge import ArrayMergePolicy, fold
from netplan_layers.core.store import LayeredConfigStore


def test_set_entity_base_scenario(make_store):
    store = make_store({"10-base.yaml": {"network": {"ethernets": {"eth0": {"dhcp4": True}}}}})

    owner = store.set_entity("ethernets", "eth0", {"dhcp4": False, "addresses": ["10.0.0.5/24"]})

    assert owner == "10-base.yaml"
    assert store.get_entity("ethernets", "eth0") == {"dhcp4": False, "addresses": ["10.0.0.5/24"]}
    assert "10-base.yaml" in store.dirty


def test_set_entity_lands_in_fragment_defining_entity(loaded_store):
    owner = loaded_store.set_entity("wifis", "wlan0", {"dhcp4": False})

    assert owner == "/etc/netplan/90-wifi.yaml"
    assert loaded_store.dirty == frozenset({"/etc/netplan/90-wifi.yaml"})
    assert loaded_store.get_fragment("/etc/netplan/90-wifi.yaml")["network"]["wifis"]["wlan0"]["dhcp4"] is False


def test_set_entity_new_entity_goes_to_latest_fragment_with_category(loaded_store):
    owner = loaded_store.set_entity("ethernets", "eth2", {"dhcp6": True})

    assert owner == "/etc/netplan/50-cloud.yaml"
    assert loaded_store.get_entity("ethernets", "eth2") == {"dhcp6": True}


def test_set_entity_falls_back_to_earliest_fragment(make_store):
    store = make_store(
        {
            "20-second.yaml": {"network": {"ethernets": {"eth0": {"dhcp4": True}}}},
            "10-first.yaml": {"network": {"version": 2}},
        }
    )

    owner = store.set_entity("bridges", "br0", {"interfaces": ["eth0"]})

    assert owner == "10-first.yaml"
    assert store.get_fragment("10-first.yaml") == {
        "network": {"version": 2, "bridges": {"br0": {"interfaces": ["eth0"]}}}
    }
    assert store.get_fragment("20-second.yaml") == {"network": {"ethernets": {"eth0": {"dhcp4": True}}}}


def test_set_entity_without_fragments_raises():
    store = LayeredConfigStore(source=None)
    store.load_fragments({})
    with pytest.raises(NoFragmentsError):
        store.set_entity("ethernets", "eth0", {"dhcp4": True})
    assert store.dirty == frozenset()


def test_set_entity_updates_entity_that_is_overridden_later(loaded_store):
    # eth0 é definido em 00 e em 50; o dono é 50 (o mais recente)
    loaded_store.set_entity("ethernets", "eth0", {"mtu": 9000})

    assert loaded_store.dirty == frozenset({"/etc/netplan/50-cloud.yaml"})
    assert loaded_store.get_entity("ethernets", "eth0") == {
        "dhcp4": False,
        "addresses": ["10.0.0.2/24"],
        "mtu": 9000,
    }


def test_set_entity_keeps_plan_equal_to_fold(loaded_store):
    loaded_store.set_entity("ethernets", "eth0", {"addresses": ["10.0.0.3/24"]})
    loaded_store.set_entity("vlans", "vlan10", {"id": 10, "link": "eth0"})

    fragments = [loaded_store.get_fragment(i) for i in loaded_store.fragment_ids]
    assert loaded_store.plan == fold(fragments)


def test_set_entity_dedups_arrays_by_default(make_store):
    store = make_store({"a.yaml": {"network": {"ethernets": {"eth0": {"addresses": ["1.1.1.1/24"]}}}}})

    store.set_entity("ethernets", "eth0", {"addresses": ["1.1.1.1/24", "8.8.8.8/24"]})
    store.set_entity("ethernets", "eth0", {"addresses": ["1.1.1.1/24", "8.8.8.8/24"]})

    assert store.get_entity("ethernets", "eth0")["addresses"] == ["1.1.1.1/24", "8.8.8.8/24"]


def test_set_entity_concat_policy_appends(make_store):
    store = make_store(
        {"a.yaml": {"network": {"ethernets": {"eth0": {"addresses": ["1.1.1.1/24"]}}}}},
        arrays=ArrayMergePolicy.CONCAT,
    )
    store.set_entity("ethernets", "eth0", {"addresses": ["1.1.1.1/24"]})
    assert store.get_entity("ethernets", "eth0")["addresses"] == ["1.1.1.1/24", "1.1.1.1/24"]


def test_set_entity_none_overwrites_without_deleting(make_store):
    store = make_store({"a.yaml": {"network": {"ethernets": {"eth0": {"dhcp4": True, "gateway4": "10.0.0.1"}}}}})

    store.set_entity("ethernets", "eth0", {"gateway4": None})

    entity = store.get_entity("ethernets", "eth0")
    assert entity == {"dhcp4": True, "gateway4": None}


def test_set_entity_copies_input_data(make_store):
    store = make_store({"a.yaml": {"network": {"ethernets": {}}}})
    data = {"addresses": ["10.0.0.9/24"]}

    store.set_entity("ethernets", "eth0", data)
    data["addresses"].append("evil")

    assert store.get_entity("ethernets", "eth0") == {"addresses": ["10.0.0.9/24"]}


def test_set_entity_records_event(loaded_store):
    loaded_store.set_entity("ethernets", "eth1", {"dhcp4": False})
    event = loaded_store.events[-1]
    assert event["event"] == "entity_set"
    assert event["fragment"] == "/etc/netplan/50-cloud.yaml"
    assert (event["category"], event["name"]) == ("ethernets", "eth1")
    assert event["plan_hash"] == loaded_store.plan_hash()


def test_set_entity_accepts_non_string_entity_names(make_store):
    # YAML permite chaves int ao lado de chaves str na mesma categoria
    store = make_store({"10-base.yaml": {"network": {"vlans": {"vlan10": {"id": 10, "link": "eth0"}}}}})

    owner = store.set_entity("vlans", 20, {"id": 20, "link": "eth0"})

    assert owner == "10-base.yaml"
    assert store.dirty == frozenset({"10-base.yaml"})
    assert store.get_entity("vlans", 20) == {"id": 20, "link": "eth0"}
    assert store.events[-1]["plan_hash"] == store.plan_hash()


def test_set_entity_commits_nothing_when_hashing_fails(loaded_store, monkeypatch):
    from netplan_layers.core import store as store_mod

    before = (loaded_store.plan, loaded_store.dirty, loaded_store.get_fragment("/etc/netplan/50-cloud.yaml"))

    def _boom(tree):
        raise RuntimeError("hash indisponível")

    monkeypatch.setattr(store_mod, "compute_tree_hash", _boom)
    with pytest.raises(RuntimeError):
        loaded_store.set_entity("ethernets", "eth1", {"mtu": 9000})

    after = (loaded_store.plan, loaded_store.dirty, loaded_store.get_fragment("/etc/netplan/50-cloud.yaml"))
    assert after == before


def test_set_entity_empty_identifier_is_a_valid_owner():
    store = LayeredConfigStore(source=None)
    store.load_fragments(
        {
            "": {"network": {"ethernets": {"eth0": {"dhcp4": True}}}},
            "b.yaml": {"network": {"ethernets": {"eth1": {"dhcp4": True}}}},
        }
    )

    owner = store.set_entity("ethernets", "eth0", {"mtu": 1500})

    assert owner == ""
    assert store.dirty == frozenset({""})
    assert store.get_fragment("b.yaml") == {"network": {"ethernets": {"eth1": {"dhcp4": True}}}}
