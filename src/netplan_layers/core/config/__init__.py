# src/netplan_layers/core/config/__init__.py

"""
Camada de settings do netplan-layers.

Este pacote carrega e valida a configuração da própria ferramenta:
diretório dos fragmentos, binário netplan e política de merge de listas.

Princípios fundamentais:
    - Nenhum default global de caminho ou binário
    - Overrides locais são sempre explícitos
    - A mesma entrada sempre produz o mesmo `NetplanConfig`

Limites explícitos:
    - Não carrega nem mescla fragmentos de rede
    - Não executa o netplan
"""

from .errors import (
    InvalidSettingsError,
    InvalidSettingsRootError,
    SettingsError,
    SettingsNotFoundError,
    UnsupportedSettingsFormatError,
)
from .loader import load_settings
from .model import NetplanConfig

__all__ = [
    "NetplanConfig",
    "load_settings",
    "SettingsError",
    "SettingsNotFoundError",
    "UnsupportedSettingsFormatError",
    "InvalidSettingsRootError",
    "InvalidSettingsError",
]
