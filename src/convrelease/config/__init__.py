"""Configuration management for convrelease."""

from __future__ import annotations

from convrelease.config.loader import load_config
from convrelease.config.models import (
    ChangelogConfig,
    CommitsConfig,
    ConvReleaseConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "ConvReleaseConfig",
    "VersionConfig",
    "load_config",
]
