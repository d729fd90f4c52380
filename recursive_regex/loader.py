"""
Declarative pattern trees.

Builds pattern trees from YAML documents through the same builder API
used in code. A document looks like::

    name: favorite_numbers          # optional, defaults to the file stem
    pattern: '(?P<name>\\w+): (?P<numbers>.*)'
    flags: [MULTILINE]              # optional
    children:
      numbers: '-?\\d+'             # a bare string is a leaf

A child may also be a mapping with its own ``pattern``, ``flags`` and
``children``.
"""
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .config import settings
from .exceptions import PatternCompileError, TreeLoadError
from .logger import get_logger
from .tree import PatternNode, leaf, root

logger = get_logger(__name__)

_NODE_KEYS = {"name", "pattern", "flags", "children"}


def _parse_flags(names: Any, source: Optional[str]) -> Optional[int]:
    if names is None:
        return None
    if isinstance(names, str):
        names = [names]
    if not isinstance(names, list):
        raise TreeLoadError(f"'flags' must be a list of flag names, got {names!r}", source)

    flags = 0
    for name in names:
        flag = getattr(re, str(name).upper(), None)
        if not isinstance(flag, re.RegexFlag):
            raise PatternCompileError(str(name), message=f"unknown regex flag {name!r}")
        flags |= flag
    return flags


def tree_from_dict(data: Union[str, Dict[str, Any]], source: Optional[str] = None) -> PatternNode:
    """
    Build a pattern tree from parsed YAML/JSON data

    Args:
        data: Node mapping, or a bare pattern string for a leaf
        source: Where the data came from, for error messages

    Returns:
        The built pattern tree

    Raises:
        TreeLoadError: if the data is not a valid tree document
        PatternCompileError: if a pattern does not compile
    """
    if isinstance(data, str):
        return leaf(data)
    if not isinstance(data, dict):
        raise TreeLoadError(f"expected a pattern string or mapping, got {type(data).__name__}", source)

    unknown = set(data) - _NODE_KEYS
    if unknown:
        raise TreeLoadError(f"unknown keys {sorted(unknown)}", source)
    pattern = data.get("pattern")
    if not isinstance(pattern, str):
        raise TreeLoadError("every node needs a 'pattern' string", source)

    flags = _parse_flags(data.get("flags"), source)
    children = data.get("children") or {}
    if not isinstance(children, dict):
        raise TreeLoadError("'children' must be a mapping of group name to node", source)

    builder = root(pattern, flags)
    for name, child in children.items():
        builder.with_child(str(name), tree_from_dict(child, source))
    return builder.build()


def tree_to_dict(node: PatternNode) -> Union[str, Dict[str, Any]]:
    """Inverse of ``tree_from_dict``; leaves without flags become bare strings"""
    flags = [flag.name for flag in re.RegexFlag
             if flag & node.pattern.flags and flag != re.UNICODE]
    if not node.children and not flags:
        return node.pattern.pattern

    data: Dict[str, Any] = {"pattern": node.pattern.pattern}
    if flags:
        data["flags"] = flags
    if node.children:
        data["children"] = {name: tree_to_dict(child) for name, child in node.children.items()}
    return data


def load_tree_from_string(document: str, source: Optional[str] = None) -> PatternNode:
    """Build a pattern tree from YAML text"""
    try:
        data = yaml.safe_load(document)
    except yaml.YAMLError as e:
        raise TreeLoadError(f"invalid YAML: {e}", source, e) from e
    if data is None:
        raise TreeLoadError("empty document", source)
    return tree_from_dict(data, source)


def load_tree(path: Union[str, Path]) -> PatternNode:
    """Build a pattern tree from a YAML file"""
    path = Path(path)
    try:
        document = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TreeLoadError(f"cannot read file: {e}", str(path), e) from e
    return load_tree_from_string(document, str(path))


def dump_tree(node: PatternNode, name: Optional[str] = None) -> str:
    """Serialize a pattern tree to YAML"""
    data = tree_to_dict(node)
    if isinstance(data, str):
        data = {"pattern": data}
    if name:
        data = {"name": name, **data}
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


class TreeLoader:
    """Loads and manages the pattern trees of a directory"""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize tree loader.

        Args:
            path: Directory of ``*.yaml`` tree files (defaults to the
                configured ``patterns_dir``)
        """
        self.path = Path(path) if path else Path(settings.patterns_dir)
        self._trees: Dict[str, PatternNode] = {}
        self._load_trees()

    def _load_trees(self) -> None:
        """Load all tree files"""
        if not self.path.exists():
            logger.warning(f"Pattern directory does not exist: {self.path}")
            return

        for tree_file in sorted(self.path.glob("*.yaml")):
            try:
                with open(tree_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
                if isinstance(data, dict) and "name" in data:
                    name = str(data["name"])
                else:
                    name = tree_file.stem
                self._trees[name] = tree_from_dict(data, str(tree_file))
                logger.info(f"Loaded pattern tree: {name}")
            except (OSError, UnicodeDecodeError, yaml.YAMLError, TreeLoadError, PatternCompileError) as e:
                logger.error(f"Failed to load pattern tree {tree_file}: {e}")

    def get_tree(self, name: str) -> Optional[PatternNode]:
        """Get a loaded tree by name"""
        return self._trees.get(name)

    def list_trees(self) -> List[str]:
        """List all loaded tree names"""
        return list(self._trees.keys())

    def add_tree(self, name: str, node: PatternNode) -> None:
        """Add or replace a tree"""
        self._trees[name] = node
        logger.info(f"Added/updated pattern tree: {name}")

    def save_tree(self, name: str) -> Path:
        """
        Save a tree to ``<path>/<name>.yaml``

        Raises:
            KeyError: if no tree with that name is loaded
        """
        node = self._trees[name]
        self.path.mkdir(parents=True, exist_ok=True)
        tree_file = self.path / f"{name}.yaml"
        tree_file.write_text(dump_tree(node, name), encoding="utf-8")
        logger.info(f"Saved pattern tree '{name}' to {tree_file}")
        return tree_file

    def reload_trees(self) -> None:
        """Reload all trees from disk"""
        self._trees.clear()
        self._load_trees()
        logger.info("Reloaded pattern trees")
