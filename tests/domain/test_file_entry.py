"""Tests for the File value object."""

import pytest
from fury.domain.value_objects.file_entry import File


class TestFile:
    def test_regular_defaults(self):
        f = File.regular("/etc/motd", b"hello")
        assert f.is_dir is False
        assert f.owner == "root"
        assert f.group == "root"
        assert f.mode == 0o644
        assert f.contents == b"hello"

    def test_directory_defaults(self):
        d = File.directory("/etc/caddy")
        assert d.is_dir is True
        assert d.mode == 0o755
        assert d.contents == b""

    def test_text_contents_encoded(self):
        f = File.regular("/etc/x", "héllo")
        assert f.contents == "héllo".encode("utf-8")

    def test_structural_equality(self):
        assert File.regular("/etc/x", "a") == File.regular("/etc/x", "a")
        assert File.regular("/etc/x", "a") != File.regular("/etc/x", "b")
        assert File.regular("/etc/x", "a") != File.regular("/etc/x", "a", owner="www")
        assert File.regular("/etc/x", "a") != File.regular("/etc/x", "a", mode=0o600)

    def test_frozen(self):
        f = File.regular("/etc/x")
        with pytest.raises(AttributeError):
            f.path = "/etc/y"

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            File(path="")

    def test_str(self):
        assert str(File.regular("/etc/x", "abc")) == "/etc/x (root:root 644 3B)"
        assert str(File.directory("/srv")) == "/srv (root:root 755 dir)"
