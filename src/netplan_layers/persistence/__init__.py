"""
Persistência de fragmentos netplan.

- `fragment_source` → enumeração e leitura/escrita de bytes brutos
- `codec`           → parse/serialização YAML dos fragmentos
"""

from .codec import parse_fragment, serialize_fragment
from .fragment_source import DirectoryFragmentSource, FragmentSource

__all__ = [
    "DirectoryFragmentSource",
    "FragmentSource",
    "parse_fragment",
    "serialize_fragment",
]
