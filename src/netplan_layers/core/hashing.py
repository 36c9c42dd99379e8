# src/netplan_layers/core/hashing.py
"""
Hashing canônico de árvores de configuração.

O hash representa a **identidade estrutural** de um plano ou fragmento e
é usado para rastreabilidade: cada evento de recomputação do plano
registra o digest resultante no Event Log da Store.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Escalares não-JSON (ex.: datas vindas do YAML) convertidos via `str`
    - Chaves de mapping convertidas via `str` (YAML aceita chaves int)
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Árvores estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres

Limites explícitos:
    - Não persiste o hash
    - Não depende de estado externo
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any, Dict


def _canonical(node: Any) -> Any:
    # YAML aceita chaves não-string (ex.: `{1: x, eth: y}`); json.dumps com
    # sort_keys não ordena tipos mistos, então as chaves viram `str` aqui.
    if isinstance(node, Mapping):
        return {str(key): _canonical(value) for key, value in node.items()}
    if isinstance(node, (list, tuple)):
        return [_canonical(item) for item in node]
    return node


def compute_tree_hash(tree: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de uma árvore de configuração.

    Args:
        tree (Dict[str, Any]): Plano ou fragmento.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(tree, dict):
        raise TypeError(
            f"Árvore para hashing deve ser dict, recebido: {type(tree).__name__}"
        )

    canonical_json = json.dumps(
        _canonical(tree),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
