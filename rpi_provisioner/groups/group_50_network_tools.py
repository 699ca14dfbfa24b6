from __future__ import annotations

from .common import PackageListGroup


class NetworkToolsGroup(PackageListGroup):
    group_id = "network_tools"
