#!/usr/bin/env python3
"""
Configuration model for Task Graph

Presentation settings for the Graphviz output plus the few switches that
control how the graph is laid out and rendered. Keys are camelCase when
loaded from or exported to YAML/JSON.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Optional

DEFAULT_HIGHLIGHT_COLOR = "yellow"


def _key(name: str):
    """Field metadata naming the camelCase key used in config files."""
    return {"key": name}


@dataclass
class GraphvizNode:
    """Presentation for task nodes."""
    # https://graphviz.org/docs/attrs/color/
    color: str = field(default="", metadata=_key("color"))
    # https://graphviz.org/docs/attrs/fillcolor/
    fill_color: str = field(default="", metadata=_key("fillColor"))
    # e.g. "filled", "dashed", "bold"
    style: str = field(default="", metadata=_key("style"))
    # https://graphviz.org/docs/attrs/fontcolor/
    font_color: str = field(default="", metadata=_key("fontColor"))


@dataclass
class GraphvizEdge:
    """Presentation for a class of edges."""
    color: str = field(default="", metadata=_key("color"))
    # Pen width; only positive values are written
    width: int = field(default=0, metadata=_key("width"))
    style: str = field(default="", metadata=_key("style"))


@dataclass
class GraphvizStyleRule:
    """Styling applied to task nodes whose names match a glob pattern."""
    match: str = field(default="", metadata=_key("match"))
    color: str = field(default="", metadata=_key("color"))
    fill_color: str = field(default="", metadata=_key("fillColor"))
    style: str = field(default="", metadata=_key("style"))
    font_color: str = field(default="", metadata=_key("fontColor"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphvizStyleRule":
        rule = cls()
        _apply_dict(rule, data)
        return rule


@dataclass
class GraphvizConfig:
    """Configuration for the Graphviz output."""
    # https://graphviz.org/docs/attrs/fontname/
    font: str = field(default="Verdana", metadata=_key("font"))
    # In points
    font_size: int = field(default=16, metadata=_key("fontSize"))
    dependency_edges: Optional[GraphvizEdge] = field(
        default_factory=lambda: GraphvizEdge(color="black", width=1, style="solid"),
        metadata=_key("dependencyEdges"))
    call_edges: Optional[GraphvizEdge] = field(
        default_factory=lambda: GraphvizEdge(color="blue", width=1, style="dashed"),
        metadata=_key("callEdges"))
    task_nodes: Optional[GraphvizNode] = field(
        default_factory=lambda: GraphvizNode(color="black"),
        metadata=_key("taskNodes"))
    # Applied in order; for each attribute the last matching rule wins
    style_rules: List[GraphvizStyleRule] = field(default_factory=list, metadata=_key("styleRules"))
    # Fill color for nodes picked out with --highlight
    highlight_color: str = field(default="", metadata=_key("highlightColor"))


@dataclass
class Config:
    """Top level configuration."""
    graphviz: Optional[GraphvizConfig] = field(default_factory=GraphvizConfig, metadata=_key("graphviz"))
    group_by_namespace: bool = field(default=False, metadata=_key("groupByNamespace"))
    # Path to the dot executable or the folder containing it; empty means look on PATH
    dot_path: str = field(default="", metadata=_key("dotPath"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create a config from defaults overlaid with the keys present in data."""
        config = cls()
        _apply_dict(config, data)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary used in config files, omitting empty defaults."""
        return _to_dict(self)

    def add_highlight(self, pattern: str) -> GraphvizStyleRule:
        """Append a style rule filling nodes that match pattern with the highlight color."""
        if self.graphviz is None:
            self.graphviz = GraphvizConfig()

        rule = GraphvizStyleRule(
            match=pattern,
            fill_color=self.graphviz.highlight_color or DEFAULT_HIGHLIGHT_COLOR,
            style="filled"
        )
        self.graphviz.style_rules.append(rule)
        return rule


# Nested section types, by field name
_SECTION_TYPES = {
    "graphviz": GraphvizConfig,
    "dependency_edges": GraphvizEdge,
    "call_edges": GraphvizEdge,
    "task_nodes": GraphvizNode,
}


def _apply_dict(target: Any, data: Dict[str, Any]) -> None:
    """Overlay the values in data onto a config dataclass, merging nested sections."""
    for f in fields(target):
        key = f.metadata.get("key", f.name)
        if key not in data:
            continue

        value = data[key]
        if value is None and f.name not in _SECTION_TYPES:
            # Explicit null keeps the default
            continue

        if f.name == "style_rules":
            value = [GraphvizStyleRule.from_dict(r) for r in value]
        elif f.name in _SECTION_TYPES and isinstance(value, dict):
            section = getattr(target, f.name)
            if section is None:
                section = _SECTION_TYPES[f.name]()
            _apply_dict(section, value)
            value = section

        setattr(target, f.name, value)


def _to_dict(source: Any, defaults: Any = None) -> Dict[str, Any]:
    """Convert a config dataclass to a camelCase dict.

    Empty values are left out when they are also the default, so the result
    loads back to the same config. An empty value that replaces a non-empty
    default (a null section, an empty font, a zero width) is kept.
    """
    if defaults is None:
        defaults = type(source)()

    result = {}
    for f in fields(source):
        value = getattr(source, f.name)
        default = getattr(defaults, f.name)
        if _is_empty(value) and value == default:
            continue

        if is_dataclass(value):
            value = _to_dict(value, default if is_dataclass(default) else None)
        elif isinstance(value, list):
            value = [_to_dict(v) if is_dataclass(v) else v for v in value]

        result[f.metadata.get("key", f.name)] = value

    return result


def _is_empty(value: Any) -> bool:
    return value is None or value in ("", 0, False, [], {})
