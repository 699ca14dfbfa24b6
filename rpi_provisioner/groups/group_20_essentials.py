from __future__ import annotations

from .common import PackageListGroup


class EssentialsGroup(PackageListGroup):
    group_id = "essentials"
