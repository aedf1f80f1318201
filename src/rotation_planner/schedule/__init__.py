"""Rotation plan generation."""

from .fair_rotation import FairRotationScheduler, ScheduleOptions, ScheduleResult, schedule

__all__ = ["FairRotationScheduler", "ScheduleOptions", "ScheduleResult", "schedule"]
