"""Decision source protocol."""

from unoclassic.agent.protocol import DecisionSource

__all__ = ["DecisionSource"]
