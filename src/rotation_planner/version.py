"""Version information for rotation planner."""

__version__ = "0.3.0"
__author__ = "Rotation Planner Team"
__email__ = "dev@rotation-planner.local"
