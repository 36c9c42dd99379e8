# src/netplan_layers/__init__.py
"""
netplan-layers — configuração netplan em camadas, com escrita no fragmento dono.

Um sistema netplan é descrito por vários arquivos YAML (fragmentos) que,
lidos em ordem, são mesclados em um único plano efetivo. Este pacote
mantém esse plano em memória, permite alterar uma interface específica
e grava de volta apenas os arquivos realmente modificados.

Arquitetura em alto nível:
    - core.merge       → combinação determinística de fragmentos
    - core.store       → LayeredConfigStore (leitura, dono, escrita, flush)
    - core.config      → settings explícitos (diretório, binário, política)
    - persistence      → enumeração de arquivos e codec YAML
    - runtime          → `netplan apply` / `netplan try`

Limites explícitos:
    - Não valida IPs nem existência de interfaces
    - Não faz rollback entre arquivos
"""

from .core.config import NetplanConfig, load_settings
from .core.exceptions import (
    ApplyFailure,
    ConfigurationError,
    InvalidFragmentRootError,
    LoadFailure,
    NetplanError,
    NoFragmentsError,
    StoreBusyError,
    WriteFailure,
)
from .core.factory import build_store
from .core.merge import NETWORK_KEY, ArrayMergePolicy, combine, fold
from .core.store import LayeredConfigStore

__version__ = "0.1.0"

__all__ = [
    "NETWORK_KEY",
    "ArrayMergePolicy",
    "combine",
    "fold",
    "LayeredConfigStore",
    "NetplanConfig",
    "load_settings",
    "build_store",
    "NetplanError",
    "LoadFailure",
    "InvalidFragmentRootError",
    "NoFragmentsError",
    "WriteFailure",
    "StoreBusyError",
    "ApplyFailure",
    "ConfigurationError",
]
