"""Protocols describing the collaborators the application layer depends on."""

from __future__ import annotations

from .rules import LevelRuleSource
from .sink import SinkPort
from .time import ClockPort, IdProvider

__all__ = ["ClockPort", "IdProvider", "LevelRuleSource", "SinkPort"]
