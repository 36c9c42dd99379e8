"""Integração com o binário netplan."""

from .apply import ApplyMode, ApplyResult, NetplanApplier

__all__ = ["ApplyMode", "ApplyResult", "NetplanApplier"]
