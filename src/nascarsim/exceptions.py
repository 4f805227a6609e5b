"""Exceptions raised by the simulation engine."""


class SimulationError(Exception):
    """Base class for race engine errors."""


class RaceNotReadyError(SimulationError):
    """The engine has no player state to report on."""


class DecisionMismatchError(SimulationError):
    """The decision being applied is not the one the engine is waiting on."""


class UnknownDecisionOptionError(SimulationError):
    """The chosen option id is not offered by the decision."""
