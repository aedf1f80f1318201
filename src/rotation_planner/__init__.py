"""Fair Rotation Planner.

Scheduling and lineup-diff engine for youth and amateur matches: generates
fair substitution plans, projects play time, validates stored plans and
cascades coach edits through later rotations.
"""

from .version import __version__, __author__, __email__
from .config import AppSettings, get_settings

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "AppSettings",
    "get_settings",
    # Key subpackages
    "models",
    "schedule",
    "transformers",
    "utils",
    "validation",
]
