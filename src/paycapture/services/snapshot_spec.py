from __future__ import annotations

from paycapture.model.ui_event import UiNode
from paycapture.services.snapshot import build_snapshot


def _node(text: str | None = None, *children: UiNode | None) -> UiNode:
    return UiNode(text=text, children=list(children))


class DescribeBuildSnapshot:
    def it_should_put_own_text_before_descendants(self):
        # Arrange
        root = _node("A", _node("B", _node("C")), _node("D"))

        # Act
        snapshot = build_snapshot(root)

        # Assert
        assert snapshot.fragments() == ["A", "B", "C", "D"]
        assert snapshot.full_text() == "ABCD"

    def it_should_return_empty_snapshot_without_root(self):
        snapshot = build_snapshot(None)
        assert len(snapshot) == 0
        assert snapshot.full_text() == ""

    def it_should_skip_missing_child_nodes(self):
        root = _node("A", None, _node("B"), None)

        snapshot = build_snapshot(root)

        assert snapshot.fragments() == ["A", "B"]

    def it_should_bound_depth(self):
        root = _node("0", _node("1", _node("2", _node("3"))))

        snapshot = build_snapshot(root, max_depth=2)

        assert snapshot.fragments() == ["0", "1"]

    def it_should_bound_width(self):
        root = _node(None, *[_node(str(i)) for i in range(10)])

        snapshot = build_snapshot(root, max_children=3)

        assert snapshot.fragments() == ["0", "1", "2"]

    def it_should_walk_deep_trees_without_recursion_limits(self):
        node = _node("leaf")
        for _ in range(5000):
            node = _node(None, node)

        snapshot = build_snapshot(node, max_depth=10_000)

        assert snapshot.fragments() == ["leaf"]

    def it_should_record_siblings_under_the_same_parent(self):
        root = _node(None, _node("label"), _node(""), _node("value"), _node("other", _node("nested")))

        snapshot = build_snapshot(root)
        label = next(n for n in snapshot if n.text == "label")

        assert [s.text for s in snapshot.siblings_of(label.index)] == ["", "value", "other"]
        assert snapshot.siblings_of(0) == []
