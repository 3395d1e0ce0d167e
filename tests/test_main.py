"""
Tests for command mode.
"""

import pytest

import main
from Calculator import config_manager


@pytest.fixture(autouse=True)
def default_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(config_manager, "config_json", tmp_path / "config.json")


class TestCommandMode:

    def test_prints_result(self, capsys):
        assert main.main(["6*2 + 3 + 12 -3"]) == 0
        assert capsys.readouterr().out == "        24\n"

    def test_fix_flag(self, capsys):
        assert main.main(["-f", "2", "1/3"]) == 0
        assert capsys.readouterr().out.strip() == "0.33"

    def test_base_flag(self, capsys):
        assert main.main(["--base", "16", "255"]) == 0
        assert capsys.readouterr().out.strip() == "ff"

    def test_radian_flag(self, capsys):
        assert main.main(["-r", "cos(pi)"]) == 0
        assert capsys.readouterr().out.strip() == "-1"

    def test_previous_answer_is_zero(self, capsys):
        assert main.main(["_+1"]) == 0
        assert capsys.readouterr().out.strip() == "1"

    def test_error_exits_with_one(self, capsys):
        assert main.main(["nroot(23)"]) == 1
        captured = capsys.readouterr()
        assert captured.err.strip() == \
            "Parser Error: Too few arguments (1) for function nroot (requires 2)!"

    def test_help(self, capsys):
        assert main.main(["help"]) == 0
        assert "Functions" in capsys.readouterr().out

    def test_invalid_base(self, capsys):
        assert main.main(["-b", "40", "1"]) == 1
        assert "Configuration Error" in capsys.readouterr().err
