# src/netplan_layers/core/tree.py
"""
Modelo de árvore de configuração do netplan-layers.

Fragmentos netplan são documentos YAML sem schema. Depois do parse, cada
nó da árvore pertence a exatamente uma de três variantes:

    - MAPPING  → dict de chaves string para nós
    - SEQUENCE → lista ordenada de nós
    - SCALAR   → qualquer outro valor (str, int, bool, float, None, datas)

Este módulo concentra a classificação dos nós (`kind_of`) e a igualdade
estrutural profunda (`structurally_equal`). O merge e a Store despacham
sobre `NodeKind` em vez de repetir checagens de tipo espalhadas.

Invariantes:
    - Todo valor possui exatamente um NodeKind
    - `structurally_equal` é reflexiva, simétrica e não muta os inputs

Limites explícitos:
    - Não valida semântica de rede
    - Não realiza parse de YAML
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping


class NodeKind(str, Enum):
    """Variante de um nó da árvore de configuração."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: Any) -> NodeKind:
    """
    Classifica um valor da árvore em sua variante canônica.

    Tuplas são tratadas como sequências para aceitar dados construídos
    em código; o parse YAML produz apenas listas.
    """
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def is_mapping(value: Any) -> bool:
    return kind_of(value) is NodeKind.MAPPING


def structurally_equal(left: Any, right: Any) -> bool:
    """
    Compara dois nós por valor, recursivamente.

    Política de igualdade:
        - MAPPING  → mesmo conjunto de chaves e valores estruturalmente iguais
        - SEQUENCE → mesmo tamanho e elementos iguais na mesma ordem
        - SCALAR   → igualdade de valor, distinguindo bool de número

    A distinção bool/número existe porque `True == 1` em Python, enquanto
    `true` e `1` são valores distintos em YAML.

    Args:
        left (Any): Primeiro nó.
        right (Any): Segundo nó.

    Returns:
        bool: True se os nós são estruturalmente iguais.
    """
    left_kind = kind_of(left)
    if left_kind is not kind_of(right):
        return False

    if left_kind is NodeKind.MAPPING:
        if set(left.keys()) != set(right.keys()):
            return False
        return all(structurally_equal(left[key], right[key]) for key in left)

    if left_kind is NodeKind.SEQUENCE:
        if len(left) != len(right):
            return False
        return all(structurally_equal(a, b) for a, b in zip(left, right))

    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


__all__ = ["NodeKind", "kind_of", "is_mapping", "structurally_equal"]
