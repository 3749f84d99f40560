"""Rules module initialization."""

from .engine import AliasIdiom, AliasRule, RuleEngine, create_default_engine

__all__ = ["AliasIdiom", "AliasRule", "RuleEngine", "create_default_engine"]
