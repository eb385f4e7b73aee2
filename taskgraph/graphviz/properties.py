#!/usr/bin/env python3
"""
Graphviz attribute lists for nodes and edges.
"""

from typing import Optional

from ..config import GraphvizEdge, GraphvizNode, GraphvizStyleRule
from ..indentwriter import Line, word_wrap
from .glob import matches

# Line break inside a Graphviz label
LINE_BREAK = "\\n"


class Properties(dict):
    """Attributes of a node or edge in the Graphviz output."""

    def add(self, key: str, value: str):
        """Set key to value, replacing any earlier value."""
        self[key] = value

    def addf(self, key: str, format_string: str, *args, **kwargs):
        """Set key to a value built with str.format."""
        self.add(key, format_string.format(*args, **kwargs))

    def add_wrapped(self, key: str, width: int, value: str):
        """Set key to value word-wrapped to width, with Graphviz line breaks between lines."""
        self[key] = LINE_BREAK.join(word_wrap(value, width))

    def add_wrapped_f(self, key: str, width: int, format_string: str, *args, **kwargs):
        """Set key to a formatted value word-wrapped to width."""
        self.add_wrapped(key, width, format_string.format(*args, **kwargs))

    def write_to(self, label: str, parent: Line):
        """Write label and its attribute list as lines nested under parent.

        Attributes are written one per line, sorted by key, so the output does
        not depend on the order they were added in.
        """
        if not self:
            # No properties to write, so just write the label
            parent.add(label)
            return

        nested = parent.add(f"{label} [")
        for key in sorted(self):
            nested.add(f'{key}="{self[key]}"')

        parent.add("]")


class NodeProperties(Properties):
    """Attributes of a task node."""

    def add_attributes(self, cfg: Optional[GraphvizNode]):
        """Add the attributes configured for task nodes."""
        if cfg is None:
            return

        self._add_styling(cfg.color, cfg.fill_color, cfg.style, cfg.font_color)

    def add_style_rule_attributes(self, node_id: str, rule: Optional[GraphvizStyleRule]):
        """Add the attributes set by rule if its pattern matches node_id.

        Only the fields the rule sets are applied, so a later rule overrides
        an earlier one attribute by attribute.
        """
        if rule is None or not matches(rule.match, node_id):
            return

        self._add_styling(rule.color, rule.fill_color, rule.style, rule.font_color)

    def apply_fill_style(self):
        """Graphviz ignores fillcolor unless the node is filled."""
        if "fillcolor" in self and "style" not in self:
            self.add("style", "filled")

    def _add_styling(self, color: str, fill_color: str, style: str, font_color: str):
        if color:
            self.add("color", color)
        if fill_color:
            self.add("fillcolor", fill_color)
        if style:
            self.add("style", style)
        if font_color:
            self.add("fontcolor", font_color)


class EdgeProperties(Properties):
    """Attributes of an edge."""

    def add_attributes(self, cfg: Optional[GraphvizEdge]):
        """Add the attributes configured for a class of edges."""
        if cfg is None:
            return

        if cfg.color:
            self.add("color", cfg.color)
        if cfg.width > 0:
            self.addf("penwidth", "{}", cfg.width)
        if cfg.style:
            self.add("style", cfg.style)
