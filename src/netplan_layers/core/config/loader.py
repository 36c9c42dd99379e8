# src/netplan_layers/core/config/loader.py
"""
Loader canônico de settings do netplan-layers.

Os settings são resolvidos a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Formato esperado (YAML ou JSON):

    netplan:
      path: /etc/netplan
      binary: /usr/sbin/netplan
      suffixes: [".yaml"]
    merge:
      arrays: dedup        # ou concat

Responsabilidades do módulo:
    - Carregar arquivos de settings em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Resolver o resultado via `combine` (local sobrepõe defaults)
    - Produzir um `NetplanConfig` explícito

Invariantes:
    - O arquivo de defaults é obrigatório
    - Overrides nunca mutam os defaults
    - Nenhum valor é lido de variáveis de ambiente

Limites explícitos:
    - Não carrega fragmentos de rede
    - Não verifica se o binário netplan existe
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from netplan_layers.core.merge import ArrayMergePolicy, combine
from netplan_layers.core.tree import is_mapping

from .errors import (
    InvalidSettingsError,
    InvalidSettingsRootError,
    SettingsNotFoundError,
    UnsupportedSettingsFormatError,
)
from .model import NetplanConfig


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de settings e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - Arquivos vazios são interpretados como dicionários vazios
        - O conteúdo raiz deve ser um dicionário

    Args:
        path (Path): Caminho para o arquivo de settings.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo.

    Raises:
        SettingsNotFoundError: Se o arquivo não existir.
        UnsupportedSettingsFormatError: Se o formato não for suportado.
        InvalidSettingsRootError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise SettingsNotFoundError(
            f"Arquivo de settings não encontrado: {path}",
            details={"path": str(path)},
        )

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedSettingsFormatError(
            f"Formato não suportado: {path.suffix}",
            details={"path": str(path)},
        )

    if data is None:
        data = {}

    if not is_mapping(data):
        raise InvalidSettingsRootError(
            f"Settings root deve ser dict, recebido: {type(data).__name__}",
            details={"path": str(path)},
        )

    return dict(data)


def _to_config(settings: Dict[str, Any]) -> NetplanConfig:
    netplan = settings.get("netplan") or {}
    merge = settings.get("merge") or {}
    if not is_mapping(netplan) or not is_mapping(merge):
        raise InvalidSettingsError("Seções `netplan` e `merge` devem ser mappings")

    missing = [key for key in ("path", "binary") if not netplan.get(key)]
    if missing:
        raise InvalidSettingsError(
            f"Settings obrigatórios ausentes: {', '.join('netplan.' + k for k in missing)}",
            details={"missing": missing},
        )

    arrays = merge.get("arrays", ArrayMergePolicy.DEDUP.value)
    try:
        policy = ArrayMergePolicy(arrays)
    except ValueError as exc:
        raise InvalidSettingsError(
            f"Política de listas desconhecida: {arrays!r}",
            details={"allowed": [p.value for p in ArrayMergePolicy]},
        ) from exc

    suffixes = netplan.get("suffixes", [".yaml"])
    if isinstance(suffixes, str):
        suffixes = [suffixes]

    return NetplanConfig(
        netplan_path=Path(netplan["path"]),
        netplan_binary=str(netplan["binary"]),
        array_merge=policy,
        fragment_suffixes=tuple(suffixes),
    )


def load_settings(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> NetplanConfig:
    """
    Carrega e resolve os settings efetivos.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional; se o caminho não existir, é ignorado
        - Quando presente, o local tem prioridade sobre defaults

    Args:
        defaults_path (str): Caminho para o arquivo de settings base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        NetplanConfig: Configuração explícita resolvida.

    Raises:
        SettingsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedSettingsFormatError: Se o formato não for suportado.
        InvalidSettingsRootError: Se o conteúdo não for um dicionário.
        InvalidSettingsError: Se campos obrigatórios faltarem ou forem inválidos.
    """
    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = combine(effective, _load_file(local_file), arrays=ArrayMergePolicy.DEDUP)

    return _to_config(effective)
