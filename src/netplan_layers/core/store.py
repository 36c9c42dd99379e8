# src/netplan_layers/core/store.py
"""
LayeredConfigStore — Store canônica de fragmentos netplan.

A Store é a única dona dos fragmentos carregados. Ela mantém:
    - a ordem canônica dos fragmentos (identificadores em ordem crescente)
    - a árvore própria (não mesclada) de cada fragmento
    - o plano derivado (`fold` de todos os fragmentos, em ordem)
    - o conjunto de fragmentos sujos (alterados desde o load/flush)

Fluxo:
    load()        → enumera, lê e interpreta todos os fragmentos da fonte
    get_*()       → leituras sobre o plano
    set_entity()  → resolve o dono, mescla no fragmento dono, marca sujo
    flush()       → grava apenas os fragmentos sujos
    apply()       → repassa ao invocador do netplan

Resolução de dono:
    Fragmentos são varridos do último para o primeiro. O primeiro que já
    define a entidade (ou, na falta dela, a categoria) é considerado a
    "casa" atual da entidade, e as edições permanecem nele. Sem nenhum
    candidato, a escrita vai para o primeiro fragmento.

Invariantes:
    - `plan == fold(fragmentos em ordem)` ao fim de toda operação
    - Um identificador está em `dirty` sse seu fragmento foi alterado
      desde o último load ou desde a sua última gravação bem-sucedida
    - O plano só é substituído depois de totalmente recomputado
    - Ordem e árvores dos fragmentos vivem em um único dict ordenado,
      substituído inteiro a cada mutação (leitores sem lock veem um
      snapshot coerente)
    - Nada é publicado antes de todo o trabalho que pode falhar terminar
    - Operações de escrita são serializadas por um lock interno

Limites explícitos:
    - Não valida semântica de rede
    - Não faz rollback entre múltiplos arquivos
    - Não remove chaves (o merge é aditivo)
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from netplan_layers.persistence.codec import parse_fragment, serialize_fragment
from netplan_layers.persistence.fragment_source import FragmentSource
from netplan_layers.runtime.apply import ApplyResult, NetplanApplier

from .events import DEFAULT_MAX_EVENTS, EventLog
from .exceptions import (
    ApplyFailure,
    ConfigurationError,
    InvalidFragmentRootError,
    LoadFailure,
    NoFragmentsError,
    StoreBusyError,
    WriteFailure,
)
from .hashing import compute_tree_hash
from .merge import NETWORK_KEY, ArrayMergePolicy, combine, copy_tree, empty_plan, fold
from .tree import is_mapping

logger = logging.getLogger(__name__)


class LayeredConfigStore:
    """Store de configuração em camadas (fragmentos → plano)."""

    def __init__(
        self,
        *,
        source: FragmentSource,
        applier: Optional[NetplanApplier] = None,
        arrays: ArrayMergePolicy = ArrayMergePolicy.DEDUP,
        lock_timeout: Optional[float] = None,
        max_events: Optional[int] = DEFAULT_MAX_EVENTS,
    ):
        self.source = source
        self.applier = applier
        self.arrays = ArrayMergePolicy(arrays)
        self.lock_timeout = lock_timeout

        # identificador -> árvore própria, em ordem canônica
        self._fragments: Dict[str, Dict[str, Any]] = {}
        self._plan: Dict[str, Any] = empty_plan()
        self._dirty: frozenset = frozenset()

        self._lock = threading.Lock()
        self._log = EventLog(logger=logger, maxlen=max_events)

    # ------------------------------------------------------------------
    # Serialização das escritas
    # ------------------------------------------------------------------
    @contextmanager
    def _exclusive(self, operation: str) -> Iterator[None]:
        if self.lock_timeout is None:
            acquired = self._lock.acquire()
        else:
            acquired = self._lock.acquire(timeout=self.lock_timeout)

        if not acquired:
            raise StoreBusyError(
                f"Store ocupada: '{operation}' não obteve o lock em {self.lock_timeout}s",
                details={"operation": operation, "lock_timeout": self.lock_timeout},
            )
        try:
            yield
        finally:
            self._lock.release()

    def _fold(self, fragments: Mapping[str, Any]) -> Dict[str, Any]:
        return fold(fragments.values(), arrays=self.arrays)

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------
    def load(self) -> None:
        """
        Carrega (ou recarrega) todos os fragmentos da fonte.

        A operação é tudo-ou-nada: qualquer falha de enumeração, leitura ou
        parse levanta `LoadFailure` e mantém o estado anterior intacto.

        Raises:
            LoadFailure: Falha de enumeração, leitura ou parse.
        """
        with self._exclusive("load"):
            try:
                identifiers = list(self.source.list_identifiers())
            except OSError as exc:
                raise LoadFailure(
                    f"Falha ao enumerar fragmentos: {exc}",
                    details={"source": repr(self.source)},
                ) from exc

            trees: Dict[str, Any] = {}
            for identifier in identifiers:
                try:
                    raw = self.source.read(identifier)
                except OSError as exc:
                    raise LoadFailure(
                        f"Falha ao ler fragmento {identifier}: {exc}",
                        identifier=identifier,
                    ) from exc
                trees[identifier] = parse_fragment(raw, identifier=identifier)

            self._ingest(trees)

    def load_fragments(self, fragments: Mapping[str, Any]) -> None:
        """
        Substitui o conjunto de fragmentos por árvores já interpretadas.

        Árvores `None` são tratadas como mappings vazios. As árvores são
        copiadas: o chamador não mantém referência mutável aos fragmentos.

        Raises:
            InvalidFragmentRootError: Se alguma árvore não for um mapping.
        """
        with self._exclusive("load_fragments"):
            trees: Dict[str, Any] = {}
            for identifier, tree in fragments.items():
                if tree is None:
                    tree = {}
                if not is_mapping(tree):
                    raise InvalidFragmentRootError(
                        f"Raiz do fragmento deve ser mapping, recebido: {type(tree).__name__}",
                        identifier=identifier,
                    )
                trees[identifier] = tree
            self._ingest(trees)

    def _ingest(self, trees: Mapping[str, Any]) -> None:
        fragments = {identifier: copy_tree(trees[identifier]) for identifier in sorted(trees)}
        plan = self._fold(fragments)
        plan_hash = compute_tree_hash(plan)

        self._fragments = fragments
        self._dirty = frozenset()
        self._plan = plan

        self._log.record("fragments_loaded", fragments=list(fragments), plan_hash=plan_hash)

    # ------------------------------------------------------------------
    # Leituras sobre o plano
    # ------------------------------------------------------------------
    def _category_node(self, category: str) -> Optional[Mapping[str, Any]]:
        network = self._plan.get(NETWORK_KEY)
        if not is_mapping(network):
            return None
        node = network.get(category)
        return node if is_mapping(node) else None

    def get_entities(self, category: str = "ethernets") -> Optional[Dict[str, Any]]:
        """Retorna as entidades de uma categoria (ex.: `ethernets`), ou None."""
        node = self._category_node(category)
        return deepcopy(dict(node)) if node is not None else None

    def get_entity_names(self, category: str) -> Optional[List[str]]:
        node = self._category_node(category)
        return list(node.keys()) if node is not None else None

    def get_entity(self, category: str, name: str) -> Any:
        node = self._category_node(category)
        if node is None:
            return None
        return deepcopy(node.get(name))

    # ------------------------------------------------------------------
    # Resolução de dono
    # ------------------------------------------------------------------
    def resolve_owner(self, category: str, name: Optional[str] = None) -> Optional[str]:
        """
        Encontra o fragmento que hoje "possui" uma categoria ou entidade.

        A varredura é feita em ordem reversa; o primeiro fragmento cuja
        árvore própria contém um mapping em `network[category]` (e, quando
        `name` é informado, um mapping em `network[category][name]`) vence.

        Args:
            category (str): Categoria (ex.: `ethernets`, `wifis`, `bridges`).
            name (Optional[str]): Nome da entidade (ex.: `eth0`).

        Returns:
            Optional[str]: Identificador do fragmento dono, ou None.
        """
        fragments = self._fragments
        for identifier, tree in reversed(fragments.items()):
            network = tree.get(NETWORK_KEY)
            if not is_mapping(network):
                continue
            node = network.get(category)
            if not is_mapping(node):
                continue
            if name is None or is_mapping(node.get(name)):
                return identifier
        return None

    # ------------------------------------------------------------------
    # Escrita
    # ------------------------------------------------------------------
    def set_entity(self, category: str, name: str, data: Any) -> str:
        """
        Mescla `data` na entidade `(category, name)` dentro do fragmento dono.

        Ordem de escolha do dono:
            1. fragmento que já define a entidade
            2. fragmento que define a categoria
            3. primeiro fragmento na ordem canônica

        Campos com valor `None` sobrescrevem o valor existente (viram `null`
        no YAML); nenhuma chave é removida. Este método não grava em disco:
        use `flush()`.

        Returns:
            str: Identificador do fragmento alterado.

        Raises:
            NoFragmentsError: Se não houver fragmentos carregados.
        """
        with self._exclusive("set_entity"):
            fragments = self._fragments
            if not fragments:
                raise NoFragmentsError(
                    "Nenhum arquivo de configuração carregado",
                    details={"category": category, "name": name},
                )

            owner = self.resolve_owner(category, name)
            if owner is None:
                owner = self.resolve_owner(category)
            if owner is None:
                owner = next(iter(fragments))

            patch = {NETWORK_KEY: {category: {name: data}}}
            updated = dict(fragments)
            updated[owner] = combine(fragments[owner], patch, arrays=self.arrays)
            plan = self._fold(updated)
            plan_hash = compute_tree_hash(plan)

            self._fragments = updated
            self._dirty = self._dirty | {owner}
            self._plan = plan

            self._log.record(
                "entity_set",
                category=category,
                name=name,
                fragment=owner,
                plan_hash=plan_hash,
            )
            return owner

    def flush(self) -> int:
        """
        Grava os fragmentos sujos, na ordem canônica.

        A gravação não é transacional: na primeira falha, os fragmentos já
        gravados saem do conjunto sujo e os demais (incluindo o que falhou)
        permanecem sujos.

        Returns:
            int: Número de fragmentos gravados nesta chamada.

        Raises:
            WriteFailure: Falha de serialização ou persistência.
        """
        with self._exclusive("flush"):
            pending = [identifier for identifier in self._fragments if identifier in self._dirty]
            logger.debug("flush: gravando %d arquivo(s)", len(pending))

            written = 0
            for identifier in pending:
                try:
                    self.source.write(identifier, serialize_fragment(self._fragments[identifier]))
                except Exception as exc:  # noqa: BLE001
                    self._log.record(
                        "flush_failed",
                        level="ERROR",
                        fragment=identifier,
                        written=written,
                        error=str(exc),
                    )
                    raise WriteFailure(
                        f"Falha ao gravar fragmento {identifier}: {exc}",
                        identifier=identifier,
                        written=written,
                    ) from exc

                self._dirty = self._dirty - {identifier}
                written += 1
                self._log.record("fragment_written", level="DEBUG", fragment=identifier)

            self._log.record("flush_completed", written=written)
            return written

    # ------------------------------------------------------------------
    # Apply
    # ------------------------------------------------------------------
    def apply(self, test: bool = False) -> ApplyResult:
        """Executa `netplan apply` (ou `netplan try` com `test=True`)."""
        if self.applier is None:
            raise ConfigurationError(
                "Nenhum invocador do netplan configurado para esta Store",
                hint="Informe `applier=` ao construir a Store ou use `build_store`.",
            )

        try:
            result = self.applier.run(test=test)
        except ApplyFailure as exc:
            self._log.record("apply_failed", level="ERROR", test=test, code=exc.returncode)
            raise

        self._log.record("apply_completed", test=test, code=result.code)
        return result

    # ------------------------------------------------------------------
    # Inspeção
    # ------------------------------------------------------------------
    @property
    def plan(self) -> Dict[str, Any]:
        return deepcopy(self._plan)

    @property
    def fragment_ids(self) -> Tuple[str, ...]:
        return tuple(self._fragments)

    @property
    def dirty(self) -> frozenset:
        return self._dirty

    @property
    def events(self) -> List[Dict[str, Any]]:
        return list(self._log.events)

    def get_fragment(self, identifier: str) -> Optional[Dict[str, Any]]:
        tree = self._fragments.get(identifier)
        return deepcopy(tree) if tree is not None else None

    def plan_hash(self) -> str:
        return compute_tree_hash(self._plan)


__all__ = ["LayeredConfigStore"]
