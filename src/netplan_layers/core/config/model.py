# src/netplan_layers/core/config/model.py
"""
Estrutura explícita de configuração do netplan-layers.

Nenhum valor de ambiente é descoberto implicitamente: o diretório de
fragmentos e o caminho do binário netplan são sempre informados por quem
constrói a configuração (código chamador ou `load_settings`).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from netplan_layers.core.merge import ArrayMergePolicy


@dataclass(frozen=True)
class NetplanConfig:
    """
    Configuração de uma Store netplan.

    Campos:
    - netplan_path: diretório dos fragmentos (ex.: `/etc/netplan`)
    - netplan_binary: caminho já resolvido do executável netplan
    - array_merge: política de merge para listas
    - fragment_suffixes: sufixos de arquivo considerados fragmentos
    """

    netplan_path: Path
    netplan_binary: str
    array_merge: ArrayMergePolicy = ArrayMergePolicy.DEDUP
    fragment_suffixes: Tuple[str, ...] = (".yaml",)
