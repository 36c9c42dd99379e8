# src/netplan_layers/core/config/errors.py
"""
Exceções canônicas da camada de settings do netplan-layers.

Settings são a configuração da própria ferramenta (onde ficam os
fragmentos, qual binário netplan usar, qual política de listas aplicar),
e não a configuração de rede gerenciada pela Store.

Invariantes:
    - Todas as exceções de settings herdam de `SettingsError`
    - `SettingsError` herda de `NetplanError` e, portanto, gera payload

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não tenta inferir valores ausentes
"""

from netplan_layers.core.errors import SETTINGS_ERROR
from netplan_layers.core.exceptions import NetplanError


class SettingsError(NetplanError):
    """
    Exceção base para erros de carregamento e validação de settings.

    Permite captura genérica de falhas de settings, distinta das falhas
    de load/flush dos fragmentos de rede.
    """

    code = SETTINGS_ERROR


class SettingsNotFoundError(SettingsError):
    """
    Exceção levantada quando o arquivo de settings base (defaults) não existe.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Nenhum caminho padrão é assumido implicitamente
    """


class UnsupportedSettingsFormatError(SettingsError):
    """
    Exceção levantada quando o formato do arquivo de settings não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidSettingsRootError(SettingsError):
    """Exceção levantada quando a raiz do arquivo de settings não é um dict."""


class InvalidSettingsError(SettingsError):
    """
    Exceção levantada quando os settings resolvidos estão incompletos ou
    contêm valores fora do domínio (ex.: política de listas desconhecida).
    """
