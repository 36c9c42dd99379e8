# src/netplan_layers/core/factory.py
"""Montagem da Store a partir de um `NetplanConfig`."""

from __future__ import annotations

from typing import Optional

from netplan_layers.persistence.fragment_source import DirectoryFragmentSource
from netplan_layers.runtime.apply import NetplanApplier

from .config.model import NetplanConfig
from .store import LayeredConfigStore


def build_store(
    config: NetplanConfig,
    *,
    applier: Optional[NetplanApplier] = None,
    lock_timeout: Optional[float] = None,
) -> LayeredConfigStore:
    """
    Cria uma Store ligada ao diretório e ao binário definidos em `config`.

    A Store é retornada vazia; chame `load()` para ler os fragmentos.
    Um `applier` explícito substitui o construído a partir de
    `config.netplan_binary`.
    """
    source = DirectoryFragmentSource(config.netplan_path, suffixes=config.fragment_suffixes)
    return LayeredConfigStore(
        source=source,
        applier=applier or NetplanApplier(config.netplan_binary),
        arrays=config.array_merge,
        lock_timeout=lock_timeout,
    )


__all__ = ["build_store"]
