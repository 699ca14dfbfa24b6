from __future__ import annotations

from typing import Any, Dict, Mapping

from ..context import SetupCtx
from ..operations import OperationGroup
from .group_10_update import UpdateGroup
from .group_20_essentials import EssentialsGroup
from .group_30_configuration import ConfigurationGroup
from .group_40_monitoring import MonitoringGroup
from .group_50_network_tools import NetworkToolsGroup
from .group_60_database import DatabaseGroup
from .group_70_gps import GpsGroup

__all__ = [
    "UpdateGroup",
    "EssentialsGroup",
    "ConfigurationGroup",
    "MonitoringGroup",
    "NetworkToolsGroup",
    "DatabaseGroup",
    "GpsGroup",
    "build_groups",
]


def group_builders():
    return [
        UpdateGroup(),
        EssentialsGroup(),
        ConfigurationGroup(),
        MonitoringGroup(),
        NetworkToolsGroup(),
        DatabaseGroup(),
        GpsGroup(),
    ]


def build_groups(ctx: SetupCtx, manifest: Mapping[str, Any]) -> Dict[str, OperationGroup]:
    """Construct every known group from the manifest, keyed by group_id."""
    return {b.group_id: b.build(ctx, manifest) for b in group_builders()}
