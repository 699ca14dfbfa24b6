import io

import pytest

from rpi_provisioner.menu import confirm, parse_custom_choice, prompt_main_menu
from rpi_provisioner.pipeline import Selection


def test_parse_custom_choice_maps_numbers_to_groups():
    assert parse_custom_choice("1, 3 7") == ["update", "configuration", "gps"]


def test_parse_custom_choice_ignores_duplicates():
    assert parse_custom_choice("2 2") == ["essentials"]


@pytest.mark.parametrize("text", ["0", "8", "x", "1,abc"])
def test_parse_custom_choice_rejects_bad_numbers(text):
    with pytest.raises(ValueError):
        parse_custom_choice(text)


@pytest.mark.parametrize(
    "answer, expected",
    [
        ("1", Selection.all()),
        ("2", Selection.single("configuration")),
        ("4", Selection.single("network_tools")),
        ("7", Selection.single("essentials")),
    ],
)
def test_main_menu_choices(console, answer, expected):
    assert prompt_main_menu(console, stream=io.StringIO(answer + "\n")) == expected


def test_exit_returns_none(console):
    assert prompt_main_menu(console, stream=io.StringIO("9\n")) is None


def test_invalid_choice_prompts_again(console):
    assert prompt_main_menu(console, stream=io.StringIO("42\n5\n")) == Selection.single("database")


def test_custom_selection(console):
    sel = prompt_main_menu(console, stream=io.StringIO("8\n6,3\n"))
    assert sel == Selection.subset(["monitoring", "gps"])


def test_custom_selection_retries_bad_input(console, out):
    sel = prompt_main_menu(console, stream=io.StringIO("8\n12\n2\n"))
    assert sel == Selection.subset(["essentials"])
    assert "Invalid component number: 12" in out.getvalue()


def test_custom_selection_none(console):
    sel = prompt_main_menu(console, stream=io.StringIO("8\n-\n"))
    assert sel == Selection.subset([])


def test_custom_selection_default_on_eof(console):
    sel = prompt_main_menu(console, stream=io.StringIO("8\n"))
    assert sel == Selection.subset(["update", "essentials", "configuration"])


def test_confirm_defaults_to_no(console):
    assert confirm(console, "Continue anyway?", stream=io.StringIO("")) is False
    assert confirm(console, "Continue anyway?", stream=io.StringIO("y\n")) is True
