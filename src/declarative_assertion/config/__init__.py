"""Configuration module for declarative-assertion."""

from declarative_assertion.config.models import AssertionConfig
from declarative_assertion.config.loader import ConfigLoader

__all__ = ["AssertionConfig", "ConfigLoader"]
