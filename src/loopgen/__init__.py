"""loopgen - code generators for LoopBack-style project trees."""

__version__ = "0.1.0"
