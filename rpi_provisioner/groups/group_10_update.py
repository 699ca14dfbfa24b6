from __future__ import annotations

from functools import partial
from typing import Any, Mapping

from ..context import SetupCtx
from ..operations import Operation, OperationGroup
from .common import group_section


class UpdateGroup:
    group_id = "update"

    def build(self, ctx: SetupCtx, manifest: Mapping[str, Any]) -> OperationGroup:
        section = group_section(manifest, self.group_id)
        commands = section.get("commands") or []
        if not isinstance(commands, list):
            raise ValueError("groups.update.commands must be a list")

        ops = []
        for cmd in commands:
            argv = [str(a) for a in (cmd.get("argv") or [])]
            if not argv:
                raise ValueError("groups.update.commands entries need a non-empty argv")
            description = str(cmd.get("description") or " ".join(argv))
            ops.append(Operation(description, partial(ctx.runner.run, ctx.cfg.privileged(argv), description)))

        return OperationGroup(group_id=self.group_id, title=str(section.get("title") or "System Update"), operations=ops)
