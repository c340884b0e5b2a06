"""tree-sitter node helpers shared by the detectors."""

from __future__ import annotations

from typing import Any


def node_text(node: Any) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def string_value(node: Any) -> str | None:
    """Value of a string literal (or a substitution-free template string)."""
    if node is None:
        return None
    if node.type == "string":
        return node_text(node)[1:-1]
    if node.type == "template_string":
        if any(c.type == "template_substitution" for c in node.named_children):
            return None
        return node_text(node)[1:-1]
    return None


def first_argument(call: Any) -> Any:
    """First non-comment argument of a ``call_expression``, if any."""
    args = call.child_by_field_name("arguments")
    if args is None:
        return None
    for child in args.named_children:
        if child.type != "comment":
            return child
    return None


def is_member_call(call: Any, obj: str, prop: str) -> bool:
    """Whether *call* is ``obj.prop(...)``."""
    if call.type != "call_expression":
        return False
    fn = call.child_by_field_name("function")
    if fn is None or fn.type != "member_expression":
        return False
    target = fn.child_by_field_name("object")
    member = fn.child_by_field_name("property")
    return (
        target is not None
        and member is not None
        and target.type == "identifier"
        and node_text(target) == obj
        and node_text(member) == prop
    )
