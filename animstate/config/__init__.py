"""Configuration management for animstate."""

from animstate.config.settings import (
    AnimStateSettings,
    LoaderConfig,
    RunnerConfig,
)

__all__ = [
    "AnimStateSettings",
    "LoaderConfig",
    "RunnerConfig",
]
