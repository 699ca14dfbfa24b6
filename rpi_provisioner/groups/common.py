from __future__ import annotations

from functools import partial
from typing import Any, Dict, List, Mapping

from ..context import SetupCtx
from ..lib.pkg import apt_install, install_package
from ..lib.services import enable_and_start, require_active
from ..operations import Operation, OperationGroup, chain


def group_section(manifest: Mapping[str, Any], group_id: str) -> Dict[str, Any]:
    section = manifest.get(group_id) or {}
    if not isinstance(section, dict):
        raise ValueError(f"groups.{group_id} must be a mapping")
    return section


def string_list(section: Mapping[str, Any], key: str, group_id: str) -> List[str]:
    values = section.get(key) or []
    if not isinstance(values, list):
        raise ValueError(f"groups.{group_id}.{key} must be a list")
    return [str(v).strip() for v in values if str(v).strip()]


def package_operations(ctx: SetupCtx, packages: List[str]) -> List[Operation]:
    """One install operation per package, so each is tallied on its own."""
    return [Operation(f"Install {p}", partial(install_package, ctx, p)) for p in packages]


class PackageListGroup:
    """A group that installs each listed package separately."""

    group_id = ""

    def build(self, ctx: SetupCtx, manifest: Mapping[str, Any]) -> OperationGroup:
        section = group_section(manifest, self.group_id)
        packages = string_list(section, "packages", self.group_id)
        return OperationGroup(
            group_id=self.group_id,
            title=str(section.get("title") or self.group_id),
            operations=package_operations(ctx, packages),
        )


class ServiceGroup:
    """Install a package set in one transaction, then enable and start its service."""

    group_id = ""

    def build(self, ctx: SetupCtx, manifest: Mapping[str, Any]) -> OperationGroup:
        section = group_section(manifest, self.group_id)
        title = str(section.get("title") or self.group_id)
        packages = string_list(section, "packages", self.group_id)
        service = str(section.get("service") or "").strip()
        if not service:
            raise ValueError(f"groups.{self.group_id}.service is required")

        install_desc = str(section.get("install_description") or f"Installing {title}")
        service_desc = str(section.get("service_description") or f"Starting {service} service")

        start = partial(enable_and_start, ctx, service, service_desc)
        if bool(section.get("wait_for_service", False)):
            start = chain(start, partial(require_active, ctx, service))

        return OperationGroup(
            group_id=self.group_id,
            title=title,
            operations=[
                Operation(install_desc, partial(apt_install, ctx, packages, install_desc)),
                Operation(service_desc, start),
            ],
        )
