# src/netplan_layers/core/events.py
"""
Event Log estruturado da Store.

Cada operação relevante da Store (load, escrita de entidade, flush,
apply) registra um evento explícito com timestamp UTC. O mesmo evento é
espelhado no `logging` padrão, para que a aplicação hospedeira decida
handlers e níveis.

Princípios:
- Nenhum evento é emitido implicitamente
- A ordem da lista reflete a ordem real das operações
- Apenas os `maxlen` eventos mais recentes são mantidos em memória
- Eventos são dicts serializáveis
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, Optional

# Eventos mais antigos são descartados além deste limite.
DEFAULT_MAX_EVENTS = 1000

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


@dataclass
class EventLog:
    """Janela ordenada dos eventos mais recentes + espelhamento no logger indicado.

    `maxlen=None` desativa o limite.
    """

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    maxlen: Optional[int] = DEFAULT_MAX_EVENTS
    events: Deque[Dict[str, Any]] = field(init=False)

    def __post_init__(self) -> None:
        self.events = deque(maxlen=self.maxlen)

    def record(self, event: str, *, level: str = "INFO", **details: Any) -> Dict[str, Any]:
        entry = {
            "event": event,
            "level": level,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        entry.update(details)
        self.events.append(entry)

        self.logger.log(_LEVELS.get(level, logging.INFO), "%s %s", event, details)
        return entry
