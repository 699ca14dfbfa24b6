import dataclasses
from collections import namedtuple
from pathlib import Path

import pytest

from rpi_provisioner.errors import PreconditionError
from rpi_provisioner.preflight import (
    check_board,
    check_disk_space,
    check_network,
    check_prerequisites,
    check_root,
)

from .conftest import FakeExecutor

Usage = namedtuple("Usage", "total used free")


def write_model(cfg, text):
    Path(cfg.model_path).write_text(text, encoding="utf-8")


def test_board_check_accepts_raspberry_pi(ctx, cfg):
    write_model(cfg, "Raspberry Pi 5 Model B Rev 1.0\x00")
    assert check_board(ctx) == "Raspberry Pi 5 Model B Rev 1.0"


def test_board_check_rejects_other_hardware(ctx, cfg):
    write_model(cfg, "Radxa ROCK 5B\x00")
    with pytest.raises(PreconditionError):
        check_board(ctx)


def test_board_check_rejects_missing_model_file(ctx):
    with pytest.raises(PreconditionError):
        check_board(ctx)


def test_root_warning(ctx, out):
    check_root(ctx, euid=0)
    assert "Running as root" in out.getvalue()


def test_network_uses_first_reachable_host(make_ctx):
    ex = FakeExecutor(lambda argv: 0 if argv[-1] == "1.1.1.1" else 1)
    assert check_network(make_ctx(ex), confirm=lambda q: pytest.fail("should not ask")) is True
    assert [c[-1] for c in ex.calls] == ["8.8.8.8", "1.1.1.1"]


def test_offline_and_declined_is_fatal(make_ctx):
    with pytest.raises(PreconditionError):
        check_network(make_ctx(FakeExecutor(lambda argv: 1)), confirm=lambda q: False)


def test_offline_but_accepted_continues(make_ctx):
    assert check_network(make_ctx(FakeExecutor(lambda argv: 1)), confirm=lambda q: True) is False


def test_missing_sudo_is_fatal(ctx):
    with pytest.raises(PreconditionError):
        check_prerequisites(ctx, which=lambda c: None if c == "sudo" else f"/usr/bin/{c}")


def test_missing_curl_is_installed(make_ctx):
    ex = FakeExecutor()
    check_prerequisites(make_ctx(ex), which=lambda c: None if c == "curl" else f"/usr/bin/{c}")
    assert ex.calls == [["apt-get", "update"], ["apt-get", "install", "-y", "curl"]]


def test_low_disk_declined_is_fatal(make_ctx, cfg):
    ctx = make_ctx(FakeExecutor())
    low = lambda path: Usage(10 * 2**30, 9 * 2**30, 512 * 2**20)
    with pytest.raises(PreconditionError):
        check_disk_space(ctx, confirm=lambda q: False, disk_usage=low)


def test_enough_disk_does_not_ask(make_ctx, cfg):
    ctx = make_ctx(FakeExecutor(), dataclasses.replace(cfg, min_free_kb=1024))
    plenty = lambda path: Usage(10 * 2**30, 2**30, 9 * 2**30)
    assert check_disk_space(ctx, confirm=lambda q: pytest.fail("should not ask"), disk_usage=plenty) == 9 * 2**20
