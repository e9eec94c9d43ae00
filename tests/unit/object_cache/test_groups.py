"""
objcache - Group Policy Tests
"""

from objcache.object_cache.groups import GroupPolicy


class TestGroupPolicy:
    def test_membership(self) -> None:
        policy = GroupPolicy(global_groups=["users"], nonpersistent_groups=["counts"])

        assert policy.is_global("users")
        assert not policy.is_global("posts")
        assert policy.is_nonpersistent("counts")
        assert not policy.is_nonpersistent("users")

    def test_add_is_idempotent(self) -> None:
        once = GroupPolicy()
        once.add_global_groups(["g"])

        twice = GroupPolicy()
        twice.add_global_groups(["g"])
        twice.add_global_groups(["g"])

        assert once.global_groups == twice.global_groups == ["g"]

    def test_accepts_single_name(self) -> None:
        policy = GroupPolicy()
        policy.add_nonpersistent_groups("transient")
        policy.add_global_groups("site-options")

        # A string is one name, not a sequence of characters
        assert policy.nonpersistent_groups == ["transient"]
        assert policy.global_groups == ["site-options"]

    def test_union_keeps_order_and_dedupes(self) -> None:
        policy = GroupPolicy(global_groups=["a", "b"])
        policy.add_global_groups(["b", "c", "a", "d"])

        assert policy.global_groups == ["a", "b", "c", "d"]

    def test_accepts_any_iterable(self) -> None:
        policy = GroupPolicy()
        policy.add_global_groups({"x"})
        policy.add_global_groups(name for name in ("y", "x"))

        assert sorted(policy.global_groups) == ["x", "y"]
