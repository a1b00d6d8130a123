from __future__ import annotations

from enum import Enum


class HealthStatus(str, Enum):
    HEALTHY = "Healthy"
    SICK = "Sick"
    INJURED = "Injured"
    DEAD = "Dead"
