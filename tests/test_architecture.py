"""
アーキテクチャテスト

目的:
- 数値レイヤ（外側→内側のみ許可、同層は許可）
- 循環 import の禁止

レイヤ（数値が小さいほど内側）:
- L0: common, engine.core
- L1: tiling, timeline
- L2: engine.render, engine.scene
- L3: app
"""

from __future__ import annotations

import ast
import pathlib
from typing import Dict, Iterator, List, Optional, Set, Tuple

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
PKG = "squareunit"

LAYER_MAP = {
    ("common",): 0,
    ("engine", "core"): 0,
    ("tiling",): 1,
    ("timeline",): 1,
    ("engine", "render"): 2,
    ("engine", "scene"): 2,
    ("app",): 3,
}


def iter_py_files(root: pathlib.Path) -> Iterator[pathlib.Path]:
    for p in root.rglob("*.py"):
        if "__pycache__" in p.parts:
            continue
        yield p


def module_name_from_path(path: pathlib.Path) -> str:
    rel = path.relative_to(SRC_DIR).with_suffix("")
    return ".".join(rel.parts)


def layer_of(module: str) -> Optional[int]:
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != PKG:
        return None
    head = parts[1]
    if head == "engine":
        if len(parts) < 3:
            return None
        return LAYER_MAP.get((head, parts[2]))
    return LAYER_MAP.get((head,))


def iter_import_edges(py_path: pathlib.Path) -> Iterator[Tuple[str, str]]:
    src_mod = module_name_from_path(py_path)
    tree = ast.parse(py_path.read_text(encoding="utf-8"), filename=str(py_path))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield src_mod, alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level > 0:  # 相対 import
                src_parts = src_mod.split(".")
                base = ".".join(src_parts[: -node.level])
                mod = node.module or ""
                yield src_mod, f"{base}.{mod}" if mod else base
            else:
                yield src_mod, node.module or ""


def collect_graph_and_violations() -> tuple[Dict[str, Set[str]], list[str]]:
    layering: list[str] = []
    graph: Dict[str, Set[str]] = {}
    py_files: List[pathlib.Path] = list(iter_py_files(SRC_DIR / PKG))
    for py in py_files:
        graph.setdefault(module_name_from_path(py), set())

    for py in py_files:
        for src, tgt in iter_import_edges(py):
            s_layer = layer_of(src)
            t_layer = layer_of(tgt)
            if s_layer is not None and t_layer is not None and s_layer < t_layer:
                layering.append(f"[{py}] {src} (L{s_layer}) -> {tgt} (L{t_layer})")
            if src in graph and tgt in graph:
                graph[src].add(tgt)
    return graph, layering


def find_cycles(graph: Dict[str, Set[str]]) -> List[List[str]]:
    cycles: List[List[str]] = []
    WHITE, GRAY, BLACK = 0, 1, 2
    color: Dict[str, int] = {u: WHITE for u in graph}
    stack: List[str] = []

    def dfs(u: str) -> None:
        color[u] = GRAY
        stack.append(u)
        for v in graph.get(u, ()):
            if color[v] == WHITE:
                dfs(v)
            elif color[v] == GRAY:
                cycle = stack[stack.index(v) :] + [v]
                if cycle not in cycles:
                    cycles.append(cycle)
        stack.pop()
        color[u] = BLACK

    for node in list(graph):
        if color[node] == WHITE:
            dfs(node)
    return cycles


def test_architecture_import_rules():
    graph, layering = collect_graph_and_violations()
    cycles = find_cycles(graph)
    msgs: list[str] = []
    if layering:
        msgs.append("Layer violations:\n" + "\n".join(layering))
    if cycles:
        msgs.append("Cycles:\n" + "\n".join(" -> ".join(c) for c in cycles))
    if msgs:
        pytest.fail("\n\n".join(msgs))


def test_layer_map_covers_every_subpackage():
    for py in iter_py_files(SRC_DIR / PKG):
        mod = module_name_from_path(py)
        parts = mod.split(".")
        # パッケージ直下のファサード/CLI と engine/__init__ は対象外
        if len(parts) == 2 or mod == f"{PKG}.engine.__init__":
            continue
        assert layer_of(mod) is not None, mod
