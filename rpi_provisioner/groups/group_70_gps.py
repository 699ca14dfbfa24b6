from __future__ import annotations

from .common import ServiceGroup


class GpsGroup(ServiceGroup):
    group_id = "gps"
