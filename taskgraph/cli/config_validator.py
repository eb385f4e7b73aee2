"""
Configuration validation for Task Graph.
Validates a loaded config file before it is applied, so that mistakes are
reported with the offending key instead of surfacing while writing output.
"""

import logging
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

TOP_LEVEL_KEYS = {'graphviz', 'groupByNamespace', 'dotPath'}
GRAPHVIZ_KEYS = {'font', 'fontSize', 'dependencyEdges', 'callEdges', 'taskNodes',
                 'styleRules', 'highlightColor'}
NODE_KEYS = {'color', 'fillColor', 'style', 'fontColor'}
EDGE_KEYS = {'color', 'width', 'style'}
STYLE_RULE_KEYS = {'match'} | NODE_KEYS


class ConfigurationValidator:
    """Validates configuration file contents to prevent runtime errors."""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def validate_config(self, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate the contents of a configuration file.

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        self.errors = []
        self.warnings = []

        if not isinstance(config, dict):
            self.errors.append(f"Configuration must be a mapping, got: {type(config).__name__}")
            return False, self.errors + self.warnings

        self._check_unknown_keys('', config, TOP_LEVEL_KEYS)

        value = config.get('groupByNamespace')
        if value is not None and not isinstance(value, bool):
            self.errors.append(f"groupByNamespace must be boolean, got: {value}")

        self._check_string('dotPath', config.get('dotPath'))

        if 'graphviz' in config:
            self._validate_graphviz_config(config['graphviz'])

        all_issues = self.errors + self.warnings
        is_valid = len(self.errors) == 0

        return is_valid, all_issues

    def _validate_graphviz_config(self, graphviz_config: Any):
        """Validate the graphviz section."""
        if graphviz_config is None:
            return

        if not isinstance(graphviz_config, dict):
            self.errors.append("graphviz must be a mapping")
            return

        self._check_unknown_keys('graphviz.', graphviz_config, GRAPHVIZ_KEYS)

        self._check_string('graphviz.font', graphviz_config.get('font'))
        self._check_string('graphviz.highlightColor', graphviz_config.get('highlightColor'))

        font_size = graphviz_config.get('fontSize')
        if font_size is not None and (not _is_int(font_size) or font_size <= 0):
            self.errors.append(f"graphviz.fontSize must be a positive integer, got: {font_size}")

        for section in ('dependencyEdges', 'callEdges'):
            if section in graphviz_config:
                self._validate_edge_config(f"graphviz.{section}", graphviz_config[section])

        if 'taskNodes' in graphviz_config:
            self._validate_node_config('graphviz.taskNodes', graphviz_config['taskNodes'], NODE_KEYS)

        self._validate_style_rules(graphviz_config.get('styleRules'))

    def _validate_edge_config(self, name: str, edge_config: Any):
        if edge_config is None:
            return

        if not isinstance(edge_config, dict):
            self.errors.append(f"{name} must be a mapping")
            return

        self._check_unknown_keys(f"{name}.", edge_config, EDGE_KEYS)
        self._check_string(f"{name}.color", edge_config.get('color'))
        self._check_string(f"{name}.style", edge_config.get('style'))

        width = edge_config.get('width')
        if width is not None and (not _is_int(width) or width < 0):
            self.errors.append(f"{name}.width must be non-negative integer, got: {width}")

    def _validate_node_config(self, name: str, node_config: Any, known_keys):
        if node_config is None:
            return

        if not isinstance(node_config, dict):
            self.errors.append(f"{name} must be a mapping")
            return

        self._check_unknown_keys(f"{name}.", node_config, known_keys)
        for key in NODE_KEYS:
            self._check_string(f"{name}.{key}", node_config.get(key))

    def _validate_style_rules(self, rules: Any):
        """Validate the list of style rules."""
        if rules is None:
            return

        if not isinstance(rules, list):
            self.errors.append("graphviz.styleRules must be a list")
            return

        for index, rule in enumerate(rules):
            name = f"graphviz.styleRules[{index}]"
            if not isinstance(rule, dict):
                self.errors.append(f"{name} must be a mapping, got: {rule}")
                continue

            self._validate_node_config(name, rule, STYLE_RULE_KEYS)

            match = rule.get('match')
            if not isinstance(match, str) or not match:
                self.errors.append(f"Missing required {name}.match pattern")

    def _check_string(self, name: str, value: Any):
        if value is not None and not isinstance(value, str):
            self.errors.append(f"{name} must be a string, got: {value}")

    def _check_unknown_keys(self, prefix: str, section: Dict[str, Any], known_keys):
        for key in section:
            if key not in known_keys:
                self.warnings.append(f"Unknown configuration key: {prefix}{key}")


def _is_int(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)
