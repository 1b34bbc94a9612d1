"""Tests for theme.py helpers that do not depend on the terminal."""

import pytest

from theme import color, is_hex_color, read_env_file


class TestEnvFile:
    def test_reads_known_keys(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text(
            "# palette\n"
            "TODO_ACCENT=#112233\n"
            "TODO_EDIT = aabbcc\n"
            "OTHER=#000000\n"
            "garbage line\n"
        )
        assert read_env_file(env) == {"TODO_ACCENT": "#112233", "TODO_EDIT": "#aabbcc"}

    def test_rejects_bad_hex(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("TODO_ACCENT=#12345\nTODO_EDIT=zzzzzz\n")
        assert read_env_file(env) == {}

    def test_missing_file(self, tmp_path):
        assert read_env_file(tmp_path / "absent.env") == {}


@pytest.mark.parametrize("value,expected", [
    ("#476EAE", True),
    ("476eae", True),
    ("#47", False),
    ("#GGGGGG", False),
])
def test_is_hex_color(value, expected):
    assert is_hex_color(value) is expected


def test_color_without_styles_is_plain():
    assert color("text") == "text"
    assert color("text", "") == "text"
