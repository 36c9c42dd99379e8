# tests/conftest.py
"""
Fixtures compartilhados para testes do netplan-layers.

Este módulo define fixtures reutilizáveis que fornecem:
- fragmentos netplan mínimos e determinísticos
- uma fonte de fragmentos em memória (sem filesystem)
- Stores prontas para uso, já carregadas

Decisões arquiteturais:
    - A fonte em memória implementa o mesmo contrato de `FragmentSource`
    - Falhas de leitura/escrita são injetadas explicitamente por identificador
    - Dados retornados são isolados por teste

Limites explícitos:
    - Não substitui testes com diretório real (ver tests/e2e)
    - Não executa o binário netplan
"""

from typing import Dict, List, Optional

import pytest
import yaml


class MemoryFragmentSource:
    """
    Fonte de fragmentos em memória, guardando bytes brutos por identificador.

    Permite simular:
        - falha de enumeração (`fail_listing`)
        - falha de leitura de um identificador (`fail_read`)
        - falha de escrita de um identificador (`fail_write`)

    Toda escrita bem-sucedida é registrada em `writes`, na ordem.
    """

    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self.files: Dict[str, bytes] = dict(files or {})
        self.writes: List[str] = []
        self.fail_listing = False
        self.fail_read: set = set()
        self.fail_write: set = set()

    @classmethod
    def from_trees(cls, trees: Dict[str, dict]) -> "MemoryFragmentSource":
        return cls({name: yaml.safe_dump(tree).encode("utf-8") for name, tree in trees.items()})

    def list_identifiers(self) -> List[str]:
        if self.fail_listing:
            raise FileNotFoundError("diretório indisponível")
        return list(self.files)

    def read(self, identifier: str) -> bytes:
        if identifier in self.fail_read:
            raise PermissionError(f"sem permissão de leitura: {identifier}")
        return self.files[identifier]

    def write(self, identifier: str, data: bytes) -> None:
        if identifier in self.fail_write:
            raise PermissionError(f"sem permissão de escrita: {identifier}")
        self.files[identifier] = data
        self.writes.append(identifier)

    def tree(self, identifier: str) -> dict:
        return yaml.safe_load(self.files[identifier]) or {}


@pytest.fixture
def base_fragments() -> Dict[str, dict]:
    """
    Três fragmentos típicos de `/etc/netplan`.

    - 00-installer: define a versão, o renderer e eth0
    - 50-cloud:     define eth1 e sobrescreve o dhcp4 de eth0
    - 90-wifi:      define apenas wifis
    """
    return {
        "/etc/netplan/50-cloud.yaml": {
            "network": {
                "ethernets": {
                    "eth0": {"dhcp4": False},
                    "eth1": {"dhcp4": True, "addresses": ["192.168.1.10/24"]},
                },
            },
        },
        "/etc/netplan/00-installer.yaml": {
            "network": {
                "version": 2,
                "renderer": "networkd",
                "ethernets": {"eth0": {"dhcp4": True, "addresses": ["10.0.0.2/24"]}},
            },
        },
        "/etc/netplan/90-wifi.yaml": {
            "network": {
                "wifis": {"wlan0": {"dhcp4": True, "access-points": {"home": {"password": "x"}}}},
            },
        },
    }


@pytest.fixture
def memory_source(base_fragments) -> MemoryFragmentSource:
    return MemoryFragmentSource.from_trees(base_fragments)


@pytest.fixture
def make_store():
    """Fábrica de Stores sobre uma `MemoryFragmentSource` já carregada."""
    from netplan_layers.core.store import LayeredConfigStore

    def _make(trees: Dict[str, dict], **kwargs) -> LayeredConfigStore:
        source = MemoryFragmentSource.from_trees(trees)
        store = LayeredConfigStore(source=source, **kwargs)
        store.load()
        return store

    return _make


@pytest.fixture
def loaded_store(make_store, base_fragments):
    return make_store(base_fragments)


@pytest.fixture
def source_factory():
    """Retorna a classe `MemoryFragmentSource` para testes que montam a própria fonte."""
    return MemoryFragmentSource
