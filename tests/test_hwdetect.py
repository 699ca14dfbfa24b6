from rpi_provisioner.lib.hwdetect import is_raspberry_pi, read_board_model, system_summary

from .conftest import FakeExecutor


def test_summary_survives_undecodable_tool_output(make_ctx):
    def garbled(argv):
        raise UnicodeDecodeError("utf-8", b"temp=\xffC", 5, 6, "invalid start byte")

    summary = system_summary(make_ctx(FakeExecutor(garbled)))

    hardware = dict(summary["Raspberry Pi Hardware"])
    assert hardware["Temperature"] == "N/A"
    assert dict(summary["Network Information"])["Primary IP"] == "Not connected"


def test_primary_ip_is_parsed_from_route(make_ctx):
    ex = FakeExecutor(stdout="1.1.1.1 via 192.168.1.1 dev eth0 src 192.168.1.50 uid 1000\n")
    summary = system_summary(make_ctx(ex))
    assert dict(summary["Network Information"])["Primary IP"] == "192.168.1.50"


def test_board_model_strips_nul(tmp_path):
    p = tmp_path / "model"
    p.write_text("Raspberry Pi 4 Model B\x00", encoding="utf-8")
    model = read_board_model(str(p))
    assert model == "Raspberry Pi 4 Model B"
    assert is_raspberry_pi(model)
    assert not is_raspberry_pi(None)
