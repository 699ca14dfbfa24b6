from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from ..context import SetupCtx
from ..lib.apt_repo import add_repository
from ..lib.hwdetect import debian_codename
from ..lib.pkg import apt_install, apt_update
from ..lib.services import enable_and_start, require_active
from ..operations import Operation, OperationGroup
from .common import group_section, string_list

logger = logging.getLogger(__name__)


class MonitoringGroup:
    """Vendor-repository services: one composite operation per stack.

    Each stack registers its apt repository, installs, starts and waits for
    its service; the first failing step ends that stack's operation.
    """

    group_id = "monitoring"

    def _stack_action(self, ctx: SetupCtx, stack: Dict[str, Any]):
        name = str(stack["name"])
        title = str(stack.get("title") or name)
        service = str(stack.get("service") or name)
        packages = string_list(stack, "packages", f"{self.group_id}.stacks.{name}") or [name]

        def _run() -> None:
            ctx.console.info(f"Setting up {title}...")
            suite = str(stack.get("suite") or "stable")
            if suite == "auto":
                suite = debian_codename()
                ctx.console.info(f"Detected Debian codename: {suite}")
            logger.info("Using apt suite %s for %s", suite, name)
            add_repository(
                ctx,
                name=name,
                key_url=str(stack["key_url"]),
                repo_url=str(stack["repo_url"]),
                suite=suite,
                component=str(stack.get("component") or "main"),
            )
            apt_update(ctx)
            apt_install(ctx, packages, f"Installing {title}")
            enable_and_start(ctx, service, f"Starting {title} service")
            require_active(ctx, service)

        return _run

    def build(self, ctx: SetupCtx, manifest: Mapping[str, Any]) -> OperationGroup:
        section = group_section(manifest, self.group_id)
        stacks = section.get("stacks") or []
        if not isinstance(stacks, list):
            raise ValueError("groups.monitoring.stacks must be a list")

        ops: List[Operation] = []
        notes: List[str] = []
        for stack in stacks:
            if not isinstance(stack, dict) or not stack.get("name"):
                raise ValueError("groups.monitoring.stacks entries need a name")
            for key in ("key_url", "repo_url"):
                if not stack.get(key):
                    raise ValueError(f"groups.monitoring.stacks.{stack['name']}.{key} is required")
            title = str(stack.get("title") or stack["name"])
            ops.append(Operation(f"Set up {title}", self._stack_action(ctx, stack)))
            if stack.get("note"):
                notes.append(str(stack["note"]))

        threshold = section.get("qualified_threshold")
        return OperationGroup(
            group_id=self.group_id,
            title=str(section.get("title") or "Monitoring Stack"),
            operations=ops,
            qualified_threshold=int(threshold) if threshold is not None else None,
            notes=notes,
        )
