# src/netplan_layers/core/merge.py
"""
Utilitário canônico de deep-merge de fragmentos netplan.

Este módulo implementa o combinador usado pelo netplan-layers para
resolver o plano (plan) a partir de N fragmentos ordenados, e também
para aplicar escritas pontuais dentro de um único fragmento.

Política de merge (v1):
    - mapping + mapping   → merge recursivo por chave (união das chaves)
    - sequence + sequence → concatenação, conforme `ArrayMergePolicy`
    - qualquer outro caso → o valor mais recente vence (last-write-wins)

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - O resultado não compartilha containers mutáveis com os inputs
    - O resultado contém apenas `dict`, `list` e escalares (serializável em YAML)
    - O merge é sensível à ordem: fold([a, b]) != fold([b, a]) em geral

Decisões arquiteturais:
    - Conflitos de tipo NÃO são erro: o valor mais recente substitui o
      anterior silenciosamente (ex.: mapping sobrescrito por escalar)
    - A política de listas é um parâmetro explícito, com DEDUP como padrão
      para evitar crescimento ilimitado em merges repetidos

Limites explícitos:
    - Não carrega arquivos
    - Não valida semântica de rede
    - Não remove chaves (merge é aditivo)
"""

from __future__ import annotations

from copy import deepcopy
from enum import Enum
from typing import Any, Dict, Iterable, List

from .tree import NodeKind, kind_of, structurally_equal


# Chave raiz de todo documento netplan.
NETWORK_KEY = "network"


class ArrayMergePolicy(str, Enum):
    """
    Política de combinação para nós do tipo sequência.

    - CONCAT: `prev ++ next`, duplicatas permitidas
    - DEDUP:  um elemento de `next` só é anexado se nenhum elemento já
              acumulado for estruturalmente igual a ele; a ordem da
              primeira ocorrência é preservada e elementos de `prev`
              nunca são removidos
    """

    CONCAT = "concat"
    DEDUP = "dedup"


def copy_tree(value: Any) -> Any:
    """Cópia profunda normalizando mappings para `dict` e sequências para `list`."""
    kind = kind_of(value)
    if kind is NodeKind.MAPPING:
        return {key: copy_tree(item) for key, item in value.items()}
    if kind is NodeKind.SEQUENCE:
        return [copy_tree(item) for item in value]
    return deepcopy(value)


def _combine_sequences(prev: Iterable[Any], next_: Iterable[Any], arrays: ArrayMergePolicy) -> List[Any]:
    result: List[Any] = [copy_tree(item) for item in prev]

    for item in next_:
        if arrays is ArrayMergePolicy.DEDUP and any(
            structurally_equal(existing, item) for existing in result
        ):
            continue
        result.append(copy_tree(item))

    return result


def combine(prev: Any, next_: Any, *, arrays: ArrayMergePolicy = ArrayMergePolicy.DEDUP) -> Any:
    """
    Combina dois nós da árvore de configuração.

    Esta função é o passo binário da redução usada por `fold` e também a
    regra aplicada por escritas pontuais na Store.

    Política de merge (v1):
        - mapping + mapping   → novo mapping; chaves de `prev` primeiro,
                                depois as chaves novas de `next_`
        - sequence + sequence → nova lista conforme `arrays`
        - demais combinações  → cópia de `next_`

    Invariantes:
        - Nunca levanta exceção por conflito de tipos
        - `prev` e `next_` não são mutados
        - `combine(x, x)` com DEDUP é estruturalmente igual a `x`

    Args:
        prev (Any): Nó acumulado (mais antigo).
        next_ (Any): Nó mais recente.
        arrays (ArrayMergePolicy): Política para sequências.

    Returns:
        Any: Novo nó resultante.
    """
    prev_kind = kind_of(prev)
    next_kind = kind_of(next_)

    if prev_kind is NodeKind.SEQUENCE and next_kind is NodeKind.SEQUENCE:
        return _combine_sequences(prev, next_, arrays)

    if prev_kind is NodeKind.MAPPING and next_kind is NodeKind.MAPPING:
        result: Dict[str, Any] = {}
        for key, value in prev.items():
            if key in next_:
                result[key] = combine(value, next_[key], arrays=arrays)
            else:
                result[key] = copy_tree(value)
        for key, value in next_.items():
            if key not in result:
                result[key] = copy_tree(value)
        return result

    # escalar ou tipos divergentes -> last-write-wins
    return copy_tree(next_)


def empty_plan() -> Dict[str, Any]:
    """Retorna o plano vazio canônico: `{"network": {}}`."""
    return {NETWORK_KEY: {}}


def fold(trees: Iterable[Any], *, arrays: ArrayMergePolicy = ArrayMergePolicy.DEDUP) -> Dict[str, Any]:
    """
    Reduz uma sequência ordenada de árvores em um único plano.

    A redução é feita da esquerda para a direita, partindo do plano vazio
    `{"network": {}}`. Fragmentos posteriores têm precedência sobre
    escalares definidos por fragmentos anteriores.

    Args:
        trees (Iterable[Any]): Árvores na ordem canônica dos fragmentos.
        arrays (ArrayMergePolicy): Política para sequências.

    Returns:
        Dict[str, Any]: Plano resultante (nova estrutura).
    """
    plan: Any = empty_plan()
    for tree in trees:
        plan = combine(plan, tree, arrays=arrays)
    return plan


__all__ = [
    "NETWORK_KEY",
    "ArrayMergePolicy",
    "combine",
    "copy_tree",
    "empty_plan",
    "fold",
]
