"""
Tree-style rendering of rsync --itemize-changes output for dry runs
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ChangeRecord:
    code: str
    path: str
    size: str = ""


@dataclass
class TreeNode:
    name: str = ""
    children: dict[str, "TreeNode"] = field(default_factory=dict)

    def insert(self, path: str):
        """Add *path* (slash separated) below this node; repeats are no-ops."""
        node = self
        for part in path.split("/"):
            if not part:
                continue
            child = node.children.get(part)
            if child is None:
                child = node.children[part] = TreeNode(part)
            node = child

    def sorted_children(self) -> list["TreeNode"]:
        return [self.children[name] for name in sorted(self.children)]


def parse_change_line(line: str) -> Optional[ChangeRecord]:
    """Parse one '%i|%n|%l' line; None when it has fewer than two fields."""
    parts = line.split("|")
    if len(parts) < 2:
        return None
    return ChangeRecord(parts[0], parts[1], parts[2] if len(parts) > 2 else "")


def build_tree(output: str) -> TreeNode:
    root = TreeNode()
    for line in output.splitlines():
        if not line.strip():
            continue
        record = parse_change_line(line)
        if record is None:
            continue
        item = record.path
        while item.startswith("./"):
            item = item[2:]
        # hidden entries (and rsync's "./" root entry) are not shown
        if not item or item.startswith("."):
            continue
        root.insert(item)
    return root


def _render_node(lines: list[str], node: TreeNode, prefix: str, last: bool):
    branch = "+--" if last else "|--"
    lines.append(f"{prefix}{branch} {node.name}")

    next_prefix = prefix + ("   " if last else "|  ")
    children = node.sorted_children()
    for idx, child in enumerate(children):
        _render_node(lines, child, next_prefix, idx == len(children) - 1)


def render_tree(output: str) -> str:
    """
    Render itemized change output as an ASCII tree:

        |-- dir
        |  +-- bar.txt
        +-- foo.txt
    """
    root = build_tree(output)
    lines: list[str] = []
    children = root.sorted_children()
    for idx, child in enumerate(children):
        _render_node(lines, child, "", idx == len(children) - 1)
    return "\n".join(lines)
