"""buildplan — static build descriptor validator and planner."""

__version__ = "0.1.0"
