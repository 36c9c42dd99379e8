"""Codec YAML dos fragmentos netplan (v1).

Converte bytes brutos de um arquivo de fragmento em árvore e vice-versa.

Decisões (v1):
- Parse com `yaml.safe_load` (sem tags arbitrárias)
- Arquivo vazio (ou documento `null`) vira `{}`
- A raiz precisa ser um mapping
- Serialização com `yaml.safe_dump`, preservando a ordem das chaves

Limites explícitos:
- Não lê nem grava arquivos
- Não valida semântica netplan
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from netplan_layers.core.exceptions import InvalidFragmentRootError, LoadFailure
from netplan_layers.core.tree import is_mapping


def parse_fragment(raw: Union[bytes, str, None], *, identifier: Optional[str] = None) -> Dict[str, Any]:
    """Interpreta o conteúdo bruto de um fragmento.

    Args:
        raw: Conteúdo do arquivo (bytes UTF-8 ou str).
        identifier: Origem do conteúdo, usada apenas em mensagens de erro.

    Returns:
        Dict[str, Any]: Árvore do fragmento.

    Raises:
        LoadFailure: Se o conteúdo não for YAML válido.
        InvalidFragmentRootError: Se a raiz não for um mapping.
    """
    if not raw:
        return {}

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise LoadFailure(
            f"YAML inválido no fragmento {identifier or '<desconhecido>'}: {exc}",
            identifier=identifier,
        ) from exc

    if data is None:
        return {}

    if not is_mapping(data):
        raise InvalidFragmentRootError(
            f"Raiz do fragmento deve ser mapping, recebido: {type(data).__name__}",
            identifier=identifier,
        )
    return dict(data)


def serialize_fragment(tree: Dict[str, Any]) -> bytes:
    """Serializa a árvore de um fragmento em bytes YAML (UTF-8)."""
    text = yaml.safe_dump(
        tree,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    return text.encode("utf-8")


__all__ = ["parse_fragment", "serialize_fragment"]
