"""Text rendering of set structures for debugging and test failure messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from digest_sets.digest import short_key

if TYPE_CHECKING:
    from digest_sets.base import OrderedDigestSet


def print_structure(s: Optional[OrderedDigestSet], key_width: int = 8) -> str:
    """
    Render *s* as text.

      • Trees: one line per depth, nodes left→right, red nodes marked ``(R)``.
      • Skip lists: one line per level from the top down, ``L<i>:`` prefixed.
    """
    from digest_sets.skip_list import SkipListSet

    if s is None:
        return "None"

    set_type = type(s).__name__
    if s.is_empty():
        return f"{set_type}: Empty"

    if isinstance(s, SkipListSet):
        lines = [f"{set_type} (size={s.size()}, level={s.level})"]
        for level in range(s.level - 1, -1, -1):
            keys = " -> ".join(short_key(n.key, key_width) for n in s.iter_level(level))
            lines.append(f"L{level}: HEAD -> {keys}")
        return "\n".join(lines)

    return _render_tree(s, set_type, key_width)


def _render_tree(t, set_type: str, key_width: int) -> str:
    from digest_sets.rb_tree import RED

    lines = [f"{set_type} (size={t.size()})"]
    layer = [t.root]
    depth = 0
    while layer:
        texts = []
        next_layer = []
        for node in layer:
            text = short_key(node.key, key_width)
            if getattr(node, "color", None) is RED:
                text += "(R)"
            texts.append(text)
            if node.left is not None:
                next_layer.append(node.left)
            if node.right is not None:
                next_layer.append(node.right)
        lines.append(f"D{depth}: " + " ".join(texts))
        layer = next_layer
        depth += 1
    return "\n".join(lines)
