from __future__ import annotations

from .common import ServiceGroup


class DatabaseGroup(ServiceGroup):
    group_id = "database"
