"""Tests for the role merger."""

import itertools
import pytest
from fury.domain.entities.role import Role
from fury.domain.errors import ConflictError
from fury.domain.services.role_merger import MergedState, merge_roles
from fury.domain.value_objects.file_entry import File


def role(packages=(), files=()):
    return Role(packages=packages, files=files)


A = role(["nginx", "curl"], [File.directory("/etc/nginx"), File.regular("/etc/nginx/a", "a")])
B = role(["git", "curl"], [File.regular("/etc/motd", "hi"), File.directory("/etc/nginx")])
C = role(["zsh"], [File.regular("/etc/zshrc", "z"), File.regular("/etc/motd", "hi")])


class TestMergeScenarios:
    def test_packages_deduplicated_and_sorted(self):
        merged = merge_roles([role(["curl"]), role(["curl", "git"])])
        assert merged.packages == ("curl", "git")

    def test_conflicting_content(self):
        a = role(files=[File.regular("/etc/x", "a")])
        b = role(files=[File.regular("/etc/x", "b")])
        with pytest.raises(ConflictError) as exc_info:
            merge_roles([a, b])
        assert exc_info.value.path == "/etc/x"
        assert "/etc/x" in str(exc_info.value)

    def test_conflicting_metadata(self):
        a = role(files=[File.regular("/etc/x", "a", mode=0o600)])
        b = role(files=[File.regular("/etc/x", "a", mode=0o644)])
        with pytest.raises(ConflictError):
            merge_roles([a, b])

    def test_directory_versus_file(self):
        a = role(files=[File.directory("/etc/x")])
        b = role(files=[File.regular("/etc/x")])
        with pytest.raises(ConflictError):
            merge_roles([a, b])

    def test_identical_duplicates_accepted_once(self):
        f = File.regular("/etc/x", "a")
        merged = merge_roles([role(files=[f]), role(files=[File.regular("/etc/x", "a")])])
        assert merged.files == (f,)

    def test_duplicates_within_one_role(self):
        f = File.regular("/etc/x", "a")
        assert merge_roles([role(["a", "a"], [f, f])]) == MergedState(("a",), (f,))

    def test_files_sorted_by_path(self):
        merged = merge_roles([A, B, C])
        assert merged.paths == (
            "/etc/motd",
            "/etc/nginx",
            "/etc/nginx/a",
            "/etc/zshrc",
        )

    def test_empty(self):
        assert merge_roles([]) == MergedState()


class TestMergeProperties:
    def test_commutative(self):
        assert merge_roles([A, B]) == merge_roles([B, A])

    def test_order_independent(self):
        expected = merge_roles([A, B, C])
        for perm in itertools.permutations([A, B, C]):
            assert merge_roles(perm) == expected

    def test_associative(self):
        left = merge_roles([merge_roles([A, B]).as_role(), C])
        right = merge_roles([A, merge_roles([B, C]).as_role()])
        assert left == right == merge_roles([A, B, C])

    def test_idempotent(self):
        once = merge_roles([A, B])
        assert merge_roles([A, B, A, B]) == once
        assert merge_roles([once.as_role(), once.as_role()]) == once

    def test_conflict_regardless_of_grouping(self):
        bad = role(files=[File.regular("/etc/motd", "bye")])
        with pytest.raises(ConflictError):
            merge_roles([merge_roles([A, B]).as_role(), bad])
        with pytest.raises(ConflictError):
            merge_roles([A, merge_roles([bad, C]).as_role()])
        with pytest.raises(ConflictError):
            merge_roles([bad, A, B])

    def test_as_role_is_hookless(self):
        r = merge_roles([A]).as_role("merged")
        assert r.name == "merged"
        assert r.pre_run is None and r.post_run is None
