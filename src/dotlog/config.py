"""
Configuration for dotlog registries.

Config file resolution (highest priority wins):
  1. Explicit path — passed by the caller or the CLI --config flag
  2. DOTLOG_CONFIG environment variable
  3. Project config — .dotlog.{json,yml,yaml,ini,xml} found walking up
     from the working directory
  4. Global config — ~/.dotlog/config.{json,yml,yaml,ini,xml}

Config layout (shown as YAML; JSON and XML nest the same way):

    dotlog:
      channels:
        audit: {type: "myapp.sinks:AuditChannel", path: audit.log}
        quiet: {type: "null"}
      root:
        level: WARNING
        channel: quiet
      loggers:
        - {name: svc, level: INFO, channel: audit}
        - {name: svc.db, level: DEBUG}

INI has no nesting, so it uses flat sections instead:

    [root]
    level = WARNING
    [channel:audit]
    type = myapp.sinks:AuditChannel
    [logger:svc.db]
    level = DEBUG

Each channel is built once and shared by every logger naming it.
The root is applied first, then loggers from shallowest to deepest, so
a configured child that is created here inherits its configured parent.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .attributes import Attributes, load_attributes
from .channels import Channel
from .errors import InvalidAttributeError, UnknownAttributeError
from .levels import SeverityLevel
from .logger import Logger
from .manager import get_registry
from .plugins import build_channel
from .registry import Registry

_log = logging.getLogger(__name__)

ENV_VAR = "DOTLOG_CONFIG"
SECTION = "dotlog"
CONFIG_SUFFIXES = (".json", ".yml", ".yaml", ".ini", ".xml")
PROJECT_CONFIG_NAMES = tuple(f".dotlog{suffix}" for suffix in CONFIG_SUFFIXES)

# Channel value that detaches a logger from any channel
NO_CHANNEL = "none"


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.dotlog/)."""
    return Path.home() / ".dotlog"


def find_global_config():
    """Return the first existing ~/.dotlog/config.* file, or None."""
    config_dir = get_global_config_dir()
    for suffix in CONFIG_SUFFIXES:
        candidate = config_dir / f"config{suffix}"
        if candidate.is_file():
            return candidate
    return None


def find_config_file(start_dir=None):
    """Walk up from start_dir looking for a .dotlog.* project config.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        for name in PROJECT_CONFIG_NAMES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def resolve_config_path(explicit=None, start_dir=None):
    """Pick the config file to use, following the precedence above.

    Returns a Path, or None when no layer supplies one. An explicit or
    environment path is returned even if it does not exist, so the
    caller reports the missing file instead of silently falling back.
    """
    if explicit:
        return Path(explicit)
    env_path = os.environ.get(ENV_VAR)
    if env_path:
        return Path(env_path)
    return find_config_file(start_dir) or find_global_config()


def load_config(path) -> Attributes:
    """Load a config file; the format comes from its suffix.

    Raises:
        FileNotFoundError: path does not exist.
        InvalidAttributeError: unknown suffix or unparsable content.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    _log.debug("loading config %s", path)
    return load_attributes(path)


# ---------------------------------------------------------------------------
# Config shape normalization
# ---------------------------------------------------------------------------
def _plain(mapping: Dict[str, Any]) -> Dict[str, Any]:
    """Fold XML attribute keys ('@level') into plain keys ('level')."""
    return {key.lstrip("@"): value for key, value in mapping.items()}


def _from_ini_sections(tree: Dict[str, Any]) -> Dict[str, Any]:
    """Rebuild the nested layout from flat [root]/[channel:x]/[logger:x] sections."""
    section: Dict[str, Any] = {"channels": {}, "loggers": []}
    for key, values in tree.items():
        kind, _, ident = key.partition(":")
        if key == "root":
            section["root"] = values
        elif kind == "channel" and ident:
            section["channels"][ident] = values
        elif kind == "logger" and ident:
            section["loggers"].append(dict(values, name=ident))
    return section


def _config_section(attrs: Attributes) -> Dict[str, Any]:
    tree = attrs.to_dict()
    if SECTION not in tree:
        return _from_ini_sections(tree)
    section = tree[SECTION]
    if section in (None, ""):
        return {}
    if not isinstance(section, dict):
        raise InvalidAttributeError(f"'{SECTION}' config section must be a mapping")
    return section


def _logger_entries(node: Any) -> List[Tuple[str, Dict[str, Any]]]:
    """Normalize the 'loggers' node to (name, settings) pairs.

    Accepts a list of {name: ...} mappings, a mapping of name to
    settings, or the XML form <loggers><logger>...</logger></loggers>.
    """
    if node in (None, ""):
        return []
    if isinstance(node, dict) and set(node) == {"logger"}:
        node = node["logger"]
        if not isinstance(node, list):
            node = [node]
    if isinstance(node, dict):
        items = []
        for name, settings in node.items():
            items.append((name, settings if isinstance(settings, dict) else {}))
        return items
    if isinstance(node, list):
        items = []
        for entry in node:
            entry = _plain(entry) if isinstance(entry, dict) else entry
            if not isinstance(entry, dict) or "name" not in entry:
                raise InvalidAttributeError(f"Logger entry needs a 'name': {entry!r}")
            name = entry["name"]
            items.append(("" if name is None else str(name), entry))
        return items
    raise InvalidAttributeError(f"'loggers' must be a list or mapping, got {type(node).__name__}")


# ---------------------------------------------------------------------------
# Applying configuration
# ---------------------------------------------------------------------------
def _channel_from_spec(ident: str, spec: Any) -> Channel:
    if spec in (None, ""):
        spec = {}
    if not isinstance(spec, dict):
        raise InvalidAttributeError(f"Channel {ident!r} must be a mapping of options")
    options = _plain(spec)
    plugin = options.pop("type", None) or ident
    return build_channel(str(plugin), **options)


def build_channels(node: Any) -> Dict[str, Channel]:
    """Build every channel declared under 'channels', keyed by id."""
    if node in (None, ""):
        return {}
    if not isinstance(node, dict):
        raise InvalidAttributeError("'channels' must be a mapping of id to options")
    channels = {}
    for ident, spec in node.items():
        channels[ident] = _channel_from_spec(ident, spec)
        _log.debug("built channel %r: %r", ident, channels[ident])
    return channels


def apply_settings(logger: Logger, settings: Dict[str, Any],
                   channels: Dict[str, Channel]) -> None:
    """Set level and/or channel on logger from one config entry."""
    label = logger.name or "<root>"
    settings = _plain(settings)
    level = settings.get("level")
    if level not in (None, ""):
        try:
            logger.threshold = SeverityLevel.parse(level)
        except ValueError as e:
            raise InvalidAttributeError(f"Logger {label}: {e}") from e

    if "channel" not in settings:
        return
    ref = settings["channel"]
    if isinstance(ref, dict):
        logger.channel = _channel_from_spec(label, ref)
    elif ref in (None, "", NO_CHANNEL):
        logger.channel = None
    elif isinstance(ref, str) and ref in channels:
        logger.channel = channels[ref]
    else:
        raise UnknownAttributeError(f"Logger {label}: unknown channel {ref!r}")


def configure(source, registry: Optional[Registry] = None) -> Registry:
    """Apply a configuration to registry (default: the global one).

    Args:
        source: Attributes or a plain mapping in the layout above
        registry: Registry to configure; None means get_registry()

    Returns:
        The configured registry.
    """
    attrs = source if isinstance(source, Attributes) else Attributes(source)
    if registry is None:
        registry = get_registry()

    section = _config_section(attrs)
    channels = build_channels(section.get("channels"))

    root_settings = section.get("root") or {}
    if not isinstance(root_settings, dict):
        raise InvalidAttributeError("'root' must be a mapping")
    apply_settings(registry.get_root(), root_settings, channels)

    entries = _logger_entries(section.get("loggers"))
    # Shallow names first so configured parents exist before children copy them
    for name, settings in sorted(entries, key=lambda item: item[0].count(".") if item[0] else -1):
        apply_settings(registry.get_or_create(name), settings, channels)

    _log.debug("configured %d channel(s), %d logger(s)", len(channels), len(entries))
    return registry


def configure_from_file(path=None, registry: Optional[Registry] = None,
                        start_dir=None) -> Optional[Registry]:
    """Resolve, load and apply a config file.

    Returns the configured registry, or None if no config file was found.
    """
    config_path = resolve_config_path(path, start_dir)
    if config_path is None:
        _log.debug("no dotlog config found")
        return None
    return configure(load_config(config_path), registry)
