"""Simulation package.

Exposes the multi-policy Simulation runner and its trace sink at
`src.simulation`.
"""
from .simulation import PolicyRun, Simulation
from .trace_log import TraceLogger, format_hit_rate

__all__ = ["PolicyRun", "Simulation", "TraceLogger", "format_hit_rate"]
