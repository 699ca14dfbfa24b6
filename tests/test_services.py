import pytest

from rpi_provisioner.errors import ProbeTimeout
from rpi_provisioner.lib.services import enable_and_start, require_active, wait_until_active

from .conftest import FakeExecutor


def active_on(attempt):
    seen = {"n": 0}

    def rule(argv):
        if argv[:2] == ["systemctl", "is-active"]:
            seen["n"] += 1
            return 0 if seen["n"] >= attempt else 3
        return 0

    return rule


def test_returns_true_on_first_active_observation(make_ctx, sleeper):
    ex = FakeExecutor(active_on(4))

    assert wait_until_active(make_ctx(ex), "postgresql", max_attempts=5, interval=2.0) is True

    assert len(ex.matching("systemctl", "is-active")) == 4
    assert sleeper.calls == [2.0, 2.0, 2.0]
    assert sleeper.elapsed == 6.0


def test_active_immediately_does_not_sleep(make_ctx, sleeper):
    assert wait_until_active(make_ctx(FakeExecutor()), "gpsd") is True
    assert sleeper.calls == []


def test_gives_up_after_max_attempts(make_ctx, sleeper, out):
    ex = FakeExecutor(lambda argv: 3)

    assert wait_until_active(make_ctx(ex), "grafana-server", max_attempts=5, interval=2.0) is False

    assert len(ex.matching("systemctl", "is-active")) == 5
    assert len(sleeper.calls) == 5
    assert "grafana-server failed to start after 5 attempts" in out.getvalue()


def test_query_error_counts_as_not_active(make_ctx):
    def broken(argv):
        raise OSError("systemctl missing")

    assert wait_until_active(make_ctx(FakeExecutor(broken)), "influxdb", max_attempts=2) is False


def test_require_active_raises_probe_timeout(make_ctx, cfg):
    with pytest.raises(ProbeTimeout) as exc:
        require_active(make_ctx(FakeExecutor(lambda argv: 3)), "influxdb")
    assert exc.value.attempts == cfg.probe_attempts


def test_enable_and_start_runs_enable_then_start(make_ctx):
    ex = FakeExecutor()
    enable_and_start(make_ctx(ex), "gpsd", "Configuring and starting GPSD")
    assert ex.calls == [["systemctl", "enable", "gpsd"], ["systemctl", "start", "gpsd"]]
