"""Baseline status classification."""

from __future__ import annotations

from .constants import (
    LIMITED_AVAILABILITY_LABEL,
    NEWLY_AVAILABLE_LABEL,
    NEWLY_AVAILABLE_TEMPLATE,
    WIDELY_AVAILABLE_LABEL,
    WIDELY_AVAILABLE_TEMPLATE,
)
from .model import FeatureStatus, StatusLabel


def _dated(template: str, fallback: str, date: str | None) -> str:
    # Some snapshots carry the tier without its date.
    if not date:
        return fallback
    return template.format(date=date)


def classify(status: FeatureStatus | None) -> StatusLabel:
    """Map a raw feature status onto its Baseline tier label and icon key."""
    if status is None:
        return StatusLabel(LIMITED_AVAILABILITY_LABEL, "limited")
    if status.baseline == "high":
        label = _dated(WIDELY_AVAILABLE_TEMPLATE, WIDELY_AVAILABLE_LABEL, status.baseline_high_date)
        return StatusLabel(label, "widely")
    if status.baseline == "low":
        label = _dated(NEWLY_AVAILABLE_TEMPLATE, NEWLY_AVAILABLE_LABEL, status.baseline_low_date)
        return StatusLabel(label, "newly")
    return StatusLabel(LIMITED_AVAILABILITY_LABEL, "limited")
