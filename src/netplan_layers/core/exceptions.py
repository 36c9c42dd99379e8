"""
netplan-layers — Canonical Exceptions (v1)

Exceções tipadas levantadas pela Store, pelos adapters de persistência
e pelo invocador do binário netplan.

Regras:
- Toda exceção herda de `NetplanError` e carrega dados estruturados em `details`.
- Nenhuma operação faz retry interno: o chamador decide o que fazer.
- `to_payload()` produz um `ErrorPayload` serializável.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import (
    APPLY_FAILURE,
    CONFIGURATION_ERROR,
    INVALID_FRAGMENT_ROOT,
    LOAD_FAILURE,
    NO_FRAGMENTS,
    STORE_BUSY,
    WRITE_FAILURE,
    ErrorPayload,
)


class NetplanError(Exception):
    """Base class para exceções do netplan-layers.

    Importante:
    - Mensagem curta e humana
    - `details` sempre serializável
    """

    code = "NETPLAN_ERROR"
    hint: Optional[str] = None

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        if hint is not None:
            self.hint = hint

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Store / fragmentos
# ---------------------------------------------------------------------------

class LoadFailure(NetplanError):
    """Falha ao enumerar, ler ou interpretar fragmentos durante o load.

    O estado anterior da Store permanece intacto.
    """

    code = LOAD_FAILURE
    hint = "Verifique o diretório de fragmentos e a sintaxe YAML antes de recarregar."

    def __init__(self, message: str, *, identifier: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.identifier = identifier
        self.details.setdefault("identifier", identifier)


class InvalidFragmentRootError(LoadFailure):
    """O conteúdo raiz de um fragmento não é um mapping."""

    code = INVALID_FRAGMENT_ROOT
    hint = "Todo fragmento netplan deve ter um mapping na raiz (ex.: `network:`)."


class NoFragmentsError(NetplanError):
    """Escrita solicitada sem nenhum fragmento carregado."""

    code = NO_FRAGMENTS
    hint = "Crie ao menos um arquivo de fragmento e recarregue a Store."


class WriteFailure(NetplanError):
    """Falha ao serializar ou persistir um fragmento durante o flush.

    Fragmentos gravados antes da falha já saíram do conjunto sujo;
    o fragmento que falhou e os seguintes continuam sujos.
    """

    code = WRITE_FAILURE
    hint = "Corrija a causa (permissões, disco) e chame flush() novamente."

    def __init__(self, message: str, *, identifier: str, written: int = 0, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.identifier = identifier
        self.written = written
        self.details.setdefault("identifier", identifier)
        self.details.setdefault("written", written)


class StoreBusyError(NetplanError):
    """Outra operação de escrita está em andamento na mesma Store."""

    code = STORE_BUSY
    hint = "Aguarde a operação em andamento ou aumente o lock_timeout."


# ---------------------------------------------------------------------------
# Execução externa / configuração
# ---------------------------------------------------------------------------

class ApplyFailure(NetplanError):
    """O binário netplan terminou com status diferente de zero (ou não iniciou)."""

    code = APPLY_FAILURE
    hint = "Inspecione stdout/stderr do netplan. Nenhum retry é feito automaticamente."

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int],
        stdout: str = "",
        stderr: str = "",
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.returncode = code
        self.stdout = stdout
        self.stderr = stderr
        self.details.update({"code": code, "stdout": stdout, "stderr": stderr})


class ConfigurationError(NetplanError):
    """Colaborador obrigatório ausente ou configuração inconsistente."""

    code = CONFIGURATION_ERROR


__all__ = [
    "NetplanError",
    "LoadFailure",
    "InvalidFragmentRootError",
    "NoFragmentsError",
    "WriteFailure",
    "StoreBusyError",
    "ApplyFailure",
    "ConfigurationError",
]
