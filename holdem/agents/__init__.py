"""
Automated policies for computer-controlled seats.
"""

from holdem.agents.base import BaseAgent, CallAgent
from holdem.agents.heuristic import HeuristicAgent, hand_strength, preflop_strength

__all__ = ["BaseAgent", "CallAgent", "HeuristicAgent", "hand_strength", "preflop_strength"]
