"""Invocação do binário netplan (`netplan apply` / `netplan try`).

O caminho do binário é sempre explícito (injetado via `NetplanConfig`);
este módulo não procura executáveis no PATH.

Decisões (v1):
- Execução síncrona via `subprocess.run`, capturando stdout/stderr como texto
- Status diferente de zero vira `ApplyFailure` com ambos os streams
- Falha ao iniciar o processo (binário ausente, sem permissão) também vira
  `ApplyFailure`, com `code=None`
- Nenhum retry automático
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from netplan_layers.core.exceptions import ApplyFailure

logger = logging.getLogger(__name__)


class ApplyMode(str, Enum):
    APPLY = "apply"
    TRY = "try"


@dataclass(frozen=True)
class ApplyResult:
    """Resultado de uma execução bem-sucedida do netplan."""

    code: int
    stdout: str = ""
    stderr: str = ""
    mode: ApplyMode = ApplyMode.APPLY


class NetplanApplier:
    """Executa o netplan para aplicar (ou testar) a configuração gravada."""

    def __init__(self, binary: str, *, extra_args: Sequence[str] = ()):
        self.binary = str(binary)
        self.extra_args = list(extra_args)

    def command(self, mode: ApplyMode) -> List[str]:
        return [self.binary, mode.value, *self.extra_args]

    def run(self, test: bool = False) -> ApplyResult:
        """Executa `netplan apply` ou, com `test=True`, `netplan try`.

        Raises:
            ApplyFailure: Se o processo não iniciar ou terminar com status != 0.
        """
        mode = ApplyMode.TRY if test else ApplyMode.APPLY
        args = self.command(mode)
        logger.debug("Executando %s", args)

        try:
            completed = subprocess.run(args, capture_output=True, text=True)
        except OSError as exc:
            raise ApplyFailure(
                f"netplan não pôde ser executado: {exc}",
                code=None,
                details={"command": args},
            ) from exc

        stdout = (completed.stdout or "").strip()
        stderr = (completed.stderr or "").strip()

        if completed.returncode != 0:
            logger.error("netplan %s falhou com código %s", mode.value, completed.returncode)
            raise ApplyFailure(
                f"netplan falhou com código {completed.returncode}.",
                code=completed.returncode,
                stdout=stdout,
                stderr=stderr,
                details={"command": args},
            )

        return ApplyResult(code=completed.returncode, stdout=stdout, stderr=stderr, mode=mode)


__all__ = ["ApplyMode", "ApplyResult", "NetplanApplier"]
