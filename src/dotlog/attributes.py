"""
Attributes — a dotted-path property tree with text serialization.

Configuration for dotlog (and for whatever embeds it) is kept in an
Attributes tree: nested dicts addressed by '.'-separated paths, where
a key that occurs more than once holds a list.

    attrs = Attributes('{"dotlog": {"root": {"level": "WARNING"}}}', Format.JSON)
    attrs.get_attr('dotlog.root.level')             # 'WARNING'
    attrs.get_attr('dotlog.root.depth', int, 3)     # 3 (default, no raise)
    attrs.put_attr('dotlog.root.channel', 'null')
    print(attrs.save_attr(Format.YAML))

Supported formats:
    XML   — xml.etree; the document element is the single top-level
            key, repeated sibling tags become lists, element
            attributes are stored under '@name' keys
    JSON  — json; the document must be an object
    INI   — configparser; sections are top-level keys, values are strings
    YAML  — PyYAML safe_load / safe_dump; the document must be a mapping

Lookups that pass through a list follow its first element.
"""

import configparser
import copy
import io
import json
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import InvalidAttributeError, UnknownAttributeError

SEPARATOR = '.'

_MISSING = object()

_TRUE = {'true', 'yes', 'on', '1'}
_FALSE = {'false', 'no', 'off', '0'}


class Format(Enum):
    """Serialization formats understood by Attributes."""
    XML = 'xml'
    JSON = 'json'
    INI = 'ini'
    YAML = 'yaml'

    @classmethod
    def parse(cls, value) -> 'Format':
        """Accept a member or a case-insensitive name ('json', 'YML', ...)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().lstrip('.')
        fmt = _SUFFIXES.get(key)
        if fmt is None:
            raise InvalidAttributeError(f"Unknown attribute format: {value!r}")
        return fmt

    @classmethod
    def from_path(cls, path) -> 'Format':
        """Pick a format from a file suffix."""
        suffix = Path(path).suffix
        if not suffix:
            raise InvalidAttributeError(f"Cannot tell format of {str(path)!r}: no suffix")
        return cls.parse(suffix)


_SUFFIXES = {
    'xml': Format.XML,
    'json': Format.JSON,
    'ini': Format.INI,
    'cfg': Format.INI,
    'yml': Format.YAML,
    'yaml': Format.YAML,
}


# =============================================================================
# Value conversion
# =============================================================================

def _convert(value: Any, cls: type, path: str) -> Any:
    """Convert a leaf value to cls, raising InvalidAttributeError on failure."""
    if isinstance(value, dict):
        raise InvalidAttributeError(f"Attribute {path!r} is not a leaf value")
    if cls is bool:
        if isinstance(value, bool):
            return value
        key = str(value).strip().lower()
        if key in _TRUE:
            return True
        if key in _FALSE:
            return False
        raise InvalidAttributeError(f"Attribute {path!r}: {value!r} is not a boolean")
    if cls is str:
        return _scalar_text(value)
    if isinstance(value, cls):
        return value
    try:
        return cls(value)
    except (TypeError, ValueError) as e:
        raise InvalidAttributeError(
            f"Attribute {path!r}: cannot convert {value!r} to {cls.__name__}: {e}"
        ) from e


def _scalar_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _split(path: str) -> List[str]:
    if not path:
        raise InvalidAttributeError("Empty attribute path")
    return path.split(SEPARATOR)


def _first(node: Any) -> Any:
    if isinstance(node, list):
        return node[0] if node else None
    return node


def _deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _deep_merge(current, value)
        else:
            target[key] = copy.deepcopy(value)


# =============================================================================
# Attributes
# =============================================================================

class Attributes:
    """Property tree addressed by dotted paths.

    Args:
        data: Serialized text (parsed with fmt), a mapping, another
            Attributes, or None for an empty tree.
        fmt: Format of data when it is a string (default XML).
    """

    def __init__(self, data=None, fmt=Format.XML):
        self._data: Dict[str, Any] = {}
        if data is None:
            return
        if isinstance(data, Attributes):
            self._data = copy.deepcopy(data._data)
        elif isinstance(data, dict):
            self._data = copy.deepcopy(data)
        elif isinstance(data, str):
            self.load_attr(data, fmt)
        else:
            raise TypeError(f"Cannot build Attributes from {type(data).__name__}")

    # -- lookup -----------------------------------------------------------

    def _lookup(self, path: str) -> Any:
        node: Any = self._data
        for key in _split(path):
            node = _first(node)
            if not isinstance(node, dict) or key not in node:
                raise UnknownAttributeError(f"No attribute at {path!r}")
            node = node[key]
        return node

    def has_attr(self, path: str) -> bool:
        try:
            self._lookup(path)
        except (UnknownAttributeError, InvalidAttributeError):
            return False
        return True

    def get_attr(self, path: str, cls: type = str, default: Any = _MISSING) -> Any:
        """Value at path converted with cls.

        Without a default, raises UnknownAttributeError for a missing
        path and InvalidAttributeError for a value that cannot be
        converted. With a default, never raises.
        """
        try:
            return _convert(_first(self._lookup(path)), cls, path)
        except (UnknownAttributeError, InvalidAttributeError):
            if default is _MISSING:
                raise
            return default

    def get_attr_list(self, path: str, cls: type = str) -> List[Any]:
        """All values of a repeated child, e.g. 'metrics.metric'.

        The last path segment names the child; everything before it
        names the parent node. A child that occurs once gives a
        one-element list and a missing child gives an empty list.
        """
        parent_path, _, child = path.rpartition(SEPARATOR)
        parent = self._lookup(parent_path) if parent_path else self._data
        parent = _first(parent)
        if not isinstance(parent, dict):
            raise InvalidAttributeError(f"Attribute {parent_path!r} has no children")
        values = parent.get(child, [])
        if not isinstance(values, list):
            values = [values]
        return [_convert(v, cls, path) for v in values]

    def get_node(self, path: str) -> Any:
        """Deep copy of the subtree (or leaf) at path."""
        return copy.deepcopy(self._lookup(path))

    # -- modifiers --------------------------------------------------------

    def _parent_for_write(self, path: str):
        keys = _split(path)
        node = self._data
        for key in keys[:-1]:
            current = node.get(key)
            child = _first(current)
            # Empty elements load as '' and may still take children
            if child is None or child == '':
                child = {}
                if isinstance(current, list) and current:
                    current[0] = child
                else:
                    node[key] = child
            elif not isinstance(child, dict):
                raise InvalidAttributeError(
                    f"Cannot write below {path!r}: {key!r} holds a value"
                )
            node = child
        return node, keys[-1]

    def put_attr(self, path: str, value: Any) -> None:
        """Set the value at path, creating intermediate nodes."""
        parent, key = self._parent_for_write(path)
        parent[key] = copy.deepcopy(value)

    def add_attr(self, path: str, value: Any) -> None:
        """Add a node at path; an existing node turns into a list."""
        parent, key = self._parent_for_write(path)
        value = copy.deepcopy(value)
        if key not in parent:
            parent[key] = value
        elif isinstance(parent[key], list):
            parent[key].append(value)
        else:
            parent[key] = [parent[key], value]

    def merge(self, other: 'Attributes') -> None:
        """Deep-merge other into this tree; other wins on conflicting leaves."""
        _deep_merge(self._data, other._data)

    def swap(self, other: 'Attributes') -> None:
        self._data, other._data = other._data, self._data

    def copy(self) -> 'Attributes':
        return Attributes(self)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    # -- serialization ----------------------------------------------------

    def load_attr(self, data: str, fmt=Format.XML) -> None:
        """Replace the tree with data parsed as fmt."""
        fmt = Format.parse(fmt)
        loader = _LOADERS[fmt]
        self._data = loader(data)

    def save_attr(self, fmt=Format.XML) -> str:
        """Serialize the tree as fmt."""
        fmt = Format.parse(fmt)
        return _SAVERS[fmt](self._data)

    # -- operators --------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Attributes):
            return NotImplemented
        return self._data == other._data

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __str__(self):
        return self.save_attr(Format.JSON)

    def __repr__(self):
        return f"Attributes({self._data!r})"


def load_attributes(path, fmt: Optional[Format] = None) -> Attributes:
    """Read a file into Attributes, picking the format from its suffix."""
    path = Path(path)
    fmt = Format.parse(fmt) if fmt is not None else Format.from_path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise InvalidAttributeError(f"{path} is not UTF-8 text: {e}") from e
    return Attributes(text, fmt)


def save_attributes(attrs: Attributes, path, fmt: Optional[Format] = None) -> Path:
    """Write Attributes to a file, picking the format from its suffix."""
    path = Path(path)
    fmt = Format.parse(fmt) if fmt is not None else Format.from_path(path)
    path.write_text(attrs.save_attr(fmt), encoding='utf-8')
    return path


# =============================================================================
# Format loaders / savers
# =============================================================================

def _require_mapping(data: Any, fmt: str) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidAttributeError(f"{fmt} document must be a mapping, got {type(data).__name__}")
    return data


# -- XML ---------------------------------------------------------------------

def _check_key(key: Any, fmt: str) -> str:
    if not isinstance(key, str):
        raise InvalidAttributeError(f"{fmt} keys must be strings, got {key!r}")
    return key


def _element_to_node(elem: ET.Element) -> Any:
    node: Dict[str, Any] = {f'@{k}': v for k, v in elem.attrib.items()}
    children = list(elem)
    text = (elem.text or '').strip()
    if not children:
        if not node:
            return text
        if text:
            node['#text'] = text
        return node
    for child in children:
        value = _element_to_node(child)
        if child.tag not in node:
            node[child.tag] = value
        elif isinstance(node[child.tag], list):
            node[child.tag].append(value)
        else:
            node[child.tag] = [node[child.tag], value]
    return node


def _fill_element(elem: ET.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, child in value.items():
            _check_key(key, 'XML')
            if key.startswith('@'):
                elem.set(key[1:], _scalar_text(child))
            elif key == '#text':
                elem.text = _scalar_text(child)
            else:
                items = child if isinstance(child, list) else [child]
                for item in items:
                    if isinstance(item, list):
                        raise InvalidAttributeError(f"Nested list under {key!r} has no XML form")
                    _fill_element(ET.SubElement(elem, key), item)
    elif isinstance(value, list):
        raise InvalidAttributeError(f"List under <{elem.tag}> needs a parent tag")
    else:
        elem.text = _scalar_text(value)


def _load_xml(data: str) -> Dict[str, Any]:
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise InvalidAttributeError(f"Invalid XML: {e}") from e
    return {root.tag: _element_to_node(root)}


def _save_xml(data: Dict[str, Any]) -> str:
    if len(data) != 1:
        raise InvalidAttributeError(
            f"XML needs exactly one top-level key, found {len(data)}"
        )
    (tag, value), = data.items()
    _check_key(tag, 'XML')
    root = ET.Element(tag)
    _fill_element(root, value)
    ET.indent(root)
    return ET.tostring(root, encoding='unicode', xml_declaration=True) + '\n'


# -- JSON --------------------------------------------------------------------

def _load_json(data: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(data) if data.strip() else {}
    except json.JSONDecodeError as e:
        raise InvalidAttributeError(f"Invalid JSON: {e}") from e
    return _require_mapping(parsed, 'JSON')


def _save_json(data: Dict[str, Any]) -> str:
    try:
        return json.dumps(data, indent=4) + '\n'
    except (TypeError, ValueError) as e:
        raise InvalidAttributeError(f"Cannot serialize as JSON: {e}") from e


# -- INI ---------------------------------------------------------------------

def _ini_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str    # keep key case
    return parser


def _load_ini(data: str) -> Dict[str, Any]:
    parser = _ini_parser()
    try:
        parser.read_string(data)
    except configparser.Error as e:
        raise InvalidAttributeError(f"Invalid INI: {e}") from e
    defaults = dict(parser.defaults())
    tree: Dict[str, Any] = {}
    if defaults:
        tree[parser.default_section] = defaults
    for section in parser.sections():
        tree[section] = {
            key: value for key, value in parser.items(section, raw=True)
            if key not in defaults or defaults[key] != value
        }
    return tree


def _save_ini(data: Dict[str, Any]) -> str:
    parser = _ini_parser()
    for section, values in data.items():
        _check_key(section, 'INI')
        if not isinstance(values, dict):
            raise InvalidAttributeError(f"INI top-level key {section!r} must be a section")
        if section != parser.default_section:
            parser.add_section(section)
        for key, value in values.items():
            _check_key(key, 'INI')
            if isinstance(value, (dict, list)):
                raise InvalidAttributeError(
                    f"INI value {section}.{key} must be a scalar"
                )
            parser.set(section, key, _scalar_text(value))
    buf = io.StringIO()
    parser.write(buf)
    return buf.getvalue()


# -- YAML --------------------------------------------------------------------

def _load_yaml(data: str) -> Dict[str, Any]:
    try:
        parsed = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise InvalidAttributeError(f"Invalid YAML: {e}") from e
    return _require_mapping(parsed, 'YAML')


def _save_yaml(data: Dict[str, Any]) -> str:
    try:
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    except yaml.YAMLError as e:
        raise InvalidAttributeError(f"Cannot serialize as YAML: {e}") from e


_LOADERS = {
    Format.XML: _load_xml,
    Format.JSON: _load_json,
    Format.INI: _load_ini,
    Format.YAML: _load_yaml,
}

_SAVERS = {
    Format.XML: _save_xml,
    Format.JSON: _save_json,
    Format.INI: _save_ini,
    Format.YAML: _save_yaml,
}
