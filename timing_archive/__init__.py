"""Local mirror of the live timing static archive."""

from .config import ArchiveConfig, StreamDescriptor, load_config
from .walker import WalkReport, run_walk, walk_catalog

__all__ = [
    "ArchiveConfig",
    "StreamDescriptor",
    "WalkReport",
    "load_config",
    "run_walk",
    "walk_catalog",
]
