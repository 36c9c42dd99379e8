"""Fontes de fragmentos netplan (v1).

A Store não conhece o filesystem: ela conversa com uma `FragmentSource`,
que sabe enumerar identificadores e ler/gravar bytes brutos.

Decisões (v1):
- Identificador = caminho do arquivo como string (`<dir>/<arquivo>`)
- Apenas arquivos com sufixo conhecido (padrão: `.yaml`) são fragmentos
- A ordenação canônica é responsabilidade da Store, não da fonte
- Nenhum cache: cada chamada reflete o estado atual do diretório
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Protocol, Sequence, Union, runtime_checkable


@runtime_checkable
class FragmentSource(Protocol):
    """Contrato mínimo entre a Store e o armazenamento dos fragmentos."""

    def list_identifiers(self) -> List[str]:
        ...

    def read(self, identifier: str) -> bytes:
        ...

    def write(self, identifier: str, data: bytes) -> None:
        ...


class DirectoryFragmentSource:
    """Fonte de fragmentos baseada em um diretório (ex.: `/etc/netplan`)."""

    def __init__(self, path: Union[str, Path], *, suffixes: Sequence[str] = (".yaml",)):
        self.path = Path(path)
        self.suffixes = tuple(suffixes)

    def list_identifiers(self) -> List[str]:
        """Lista os fragmentos do diretório.

        Raises:
            FileNotFoundError: Se o diretório não existir.
            NotADirectoryError: Se o caminho não for um diretório.
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Diretório de fragmentos não encontrado: {self.path}")
        if not self.path.is_dir():
            raise NotADirectoryError(f"Caminho de fragmentos não é diretório: {self.path}")

        return [
            str(entry)
            for entry in self.path.iterdir()
            if entry.is_file() and entry.name.endswith(self.suffixes)
        ]

    def read(self, identifier: str) -> bytes:
        return Path(identifier).read_bytes()

    def write(self, identifier: str, data: bytes) -> None:
        Path(identifier).write_bytes(data)

    def __repr__(self) -> str:
        return f"DirectoryFragmentSource(path={str(self.path)!r}, suffixes={self.suffixes!r})"


__all__ = ["FragmentSource", "DirectoryFragmentSource"]
