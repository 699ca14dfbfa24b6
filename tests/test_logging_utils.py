import logging
import re

from rpi_provisioner.logging_utils import configure_logging


def test_log_lines_have_timestamp_level_message(tmp_path):
    path = tmp_path / "logs" / "setup.log"

    actual = configure_logging(log_path=str(path))
    logging.getLogger("rpi_provisioner.test").info("SUCCESS: Installing git")
    for h in logging.getLogger().handlers:
        h.flush()

    assert actual == str(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - INFO SUCCESS: Installing git", lines[-1])


def test_second_call_keeps_first_path(tmp_path):
    first = configure_logging(log_path=str(tmp_path / "a.log"))
    second = configure_logging(log_path=str(tmp_path / "b.log"))
    assert first == second == str(tmp_path / "a.log")


def test_log_is_appended(tmp_path):
    path = tmp_path / "setup.log"
    path.write_text("earlier run\n", encoding="utf-8")

    configure_logging(log_path=str(path))
    logging.getLogger("rpi_provisioner.test").warning("again")
    for h in logging.getLogger().handlers:
        h.flush()

    assert path.read_text(encoding="utf-8").startswith("earlier run\n")
