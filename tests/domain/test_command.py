"""Tests for the Command value object."""

import io
import pytest
from fury.domain.value_objects.command import Command


class TestCommand:
    def test_from_argv(self):
        cmd = Command.from_argv("apt-get", "-y", "install", "curl")
        assert cmd.path == "apt-get"
        assert cmd.args == ("-y", "install", "curl")
        assert cmd.argv == ("apt-get", "-y", "install", "curl")

    def test_args_list_becomes_tuple(self):
        cmd = Command("ls", ["-l", "/"])
        assert cmd.args == ("-l", "/")

    def test_streams_passed_through(self):
        stdin = io.BytesIO(b"data")
        cmd = Command.from_argv("cat", stdin=stdin)
        assert cmd.stdin is stdin
        assert cmd.stdout is None

    def test_empty_argv_rejected(self):
        with pytest.raises(ValueError):
            Command.from_argv()

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            Command("")

    @pytest.mark.parametrize("name", ["A B", "1ABC", "X=Y", "$(id)", ""])
    def test_invalid_env_names_rejected(self, name):
        with pytest.raises(ValueError):
            Command("env", env={name: "v"})

    def test_valid_env_names(self):
        cmd = Command("env", env={"DEBIAN_FRONTEND": "noninteractive", "_x1": ""})
        assert cmd.env["DEBIAN_FRONTEND"] == "noninteractive"

    def test_str(self):
        assert str(Command.from_argv("tar", "-x")) == "tar -x"
