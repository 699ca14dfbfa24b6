from __future__ import annotations

from functools import partial
from typing import Any, Mapping

from ..context import SetupCtx
from ..lib import raspi_config
from ..operations import Operation, OperationGroup
from .common import group_section


class ConfigurationGroup:
    group_id = "configuration"

    def build(self, ctx: SetupCtx, manifest: Mapping[str, Any]) -> OperationGroup:
        section = group_section(manifest, self.group_id)
        country = ctx.cfg.wifi_country
        return OperationGroup(
            group_id=self.group_id,
            title=str(section.get("title") or "System Configuration"),
            operations=[
                Operation("Expanding filesystem", partial(raspi_config.expand_rootfs, ctx)),
                Operation(f"Setting WiFi region to {country}", partial(raspi_config.set_wifi_country, ctx, country)),
                Operation("Enabling VNC server", partial(raspi_config.enable_vnc, ctx)),
                Operation("Enabling SSH", partial(raspi_config.enable_ssh, ctx)),
            ],
        )
