"""
netplan-layers — Canonical Error Structures (v1)

Este módulo define o payload canônico de erros do netplan-layers.
Toda exceção do pacote pode ser convertida em um `ErrorPayload`,
que é:

- explícito
- serializável
- acionável (carrega uma dica ao operador)

Os códigos abaixo são estáveis e não devem ser tratados como texto livre.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro.

    Campos:
    - type: código estável do erro
    - message: mensagem curta e humana
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Store / fragmentos
LOAD_FAILURE = "LOAD_FAILURE"
INVALID_FRAGMENT_ROOT = "INVALID_FRAGMENT_ROOT"
NO_FRAGMENTS = "NO_FRAGMENTS"
WRITE_FAILURE = "WRITE_FAILURE"
STORE_BUSY = "STORE_BUSY"

# Execução externa
APPLY_FAILURE = "APPLY_FAILURE"

# Configuração
CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
SETTINGS_ERROR = "SETTINGS_ERROR"
