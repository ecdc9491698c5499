import itertools
from typing import List, Mapping, Optional

import pandas as pd

from .config import tree_max_depth
from .core import Node

_NAMED_SYMBOLS = {
    " ": "(space)",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def symbol_label(sym: str) -> str:
    """Readable label for a symbol in tables and tree nodes."""
    if sym in _NAMED_SYMBOLS:
        return _NAMED_SYMBOLS[sym]
    if not sym.isprintable():
        return f"U+{ord(sym):04X}"
    return sym


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


# --------------------------------
# Convert Tree to Graphviz format
# --------------------------------
def tree_to_dot(root: Optional[Node], max_depth: Optional[int] = None) -> str:
    if max_depth is None:
        max_depth = tree_max_depth()
    # nodes get their own ids (n0, n1, ...) since weights and labels repeat
    lines: List[str] = [
        "digraph G {",
        "node [shape=circle, style=filled, color=lightblue];",
    ]
    ids = itertools.count()

    def traverse(n: Node, depth: int) -> str:
        name = f"n{next(ids)}"
        if n.is_leaf:
            label = f"{symbol_label(n.symbol)}:{n.weight}"
            lines.append(f'{name} [label="{_dot_escape(label)}", shape=box];')
        else:
            lines.append(f'{name} [label="{n.weight}"];')
        if depth >= max_depth:
            return name
        for child, bit in ((n.left, "0"), (n.right, "1")):
            if child is not None:
                child_name = traverse(child, depth + 1)
                lines.append(f'{name} -> {child_name} [label="{bit}"];')
        return name

    if root is not None:
        traverse(root, 0)
    lines.append("}")
    return "\n".join(lines)


# --------------------------------
# Tables
# --------------------------------
def code_table_frame(freq_map: Mapping[str, int], codes: Mapping[str, str]) -> pd.DataFrame:
    rows = [
        (symbol_label(sym), freq_map[sym], code, len(code))
        for sym, code in codes.items()
    ]
    df = pd.DataFrame(rows, columns=["Symbol", "Frequency", "Code", "Bits"])
    return df.sort_values(["Frequency", "Code"], ascending=[False, True],
                          ignore_index=True)


def timings_frame(timings: Mapping[str, float]) -> pd.DataFrame:
    return pd.DataFrame(list(timings.items()), columns=["Step", "Time (s)"])
