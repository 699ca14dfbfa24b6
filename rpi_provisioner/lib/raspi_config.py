from __future__ import annotations

from ..context import SetupCtx

# raspi-config nonint takes 0 to mean "enable" for its on/off toggles.
ENABLE = "0"


def _nonint(ctx: SetupCtx, args: list[str], description: str) -> None:
    ctx.runner.run(ctx.cfg.privileged(["raspi-config", "nonint", *args]), description)


def expand_rootfs(ctx: SetupCtx) -> None:
    _nonint(ctx, ["do_expand_rootfs"], "Expanding filesystem")


def set_wifi_country(ctx: SetupCtx, country: str) -> None:
    _nonint(ctx, ["do_wifi_country", country], f"Setting WiFi region to {country}")


def enable_vnc(ctx: SetupCtx) -> None:
    _nonint(ctx, ["do_vnc", ENABLE], "Enabling VNC server")


def enable_ssh(ctx: SetupCtx) -> None:
    _nonint(ctx, ["do_ssh", ENABLE], "Enabling SSH")
