"""Loading and validation of the YAML hosts file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from wakectl.core.errors import (
    HostLookupError,
    HostsLoadError,
    HostsValidationError,
    InvalidAddressFormatError,
)
from wakectl.core.mac import parse_mac
from wakectl.core.model import HostEntry, WakeConfig, WakeProtocol

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise HostsValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedHosts:
    config: WakeConfig
    hosts: dict[str, HostEntry]

    def lookup(self, name: str) -> HostEntry:
        entry = self.hosts.get(name)
        if entry is None:
            known = ", ".join(sorted(self.hosts)) or "<none>"
            raise HostLookupError(
                f"'{name}' is neither a MAC address nor a configured host. Known hosts: {known}"
            )
        return entry


def default_hosts_path() -> Path:
    override = os.environ.get("WAKECTL_CONFIG")
    if override:
        return Path(override)
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "wakectl/hosts.yaml"


def _load_schema_validator() -> Any:
    schema_text = resources.files("wakectl.schemas").joinpath("hosts.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise HostsLoadError(f"Could not read hosts file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise HostsValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise HostsValidationError(f"Hosts file {path} must contain a mapping at root")
    return loaded


def _build_config(settings: dict[str, Any]) -> WakeConfig:
    defaults = WakeConfig()
    return WakeConfig(
        broadcast=str(settings.get("broadcast", defaults.broadcast)),
        discard_port=int(settings.get("discard_port", defaults.discard_port)),
        echo_timeout_s=float(settings.get("echo_timeout_s", defaults.echo_timeout_s)),
        echo_buffer_size=int(settings.get("echo_buffer_size", defaults.echo_buffer_size)),
    )


def _build_host(name: str, spec: dict[str, Any], source: Path) -> HostEntry:
    try:
        mac = parse_mac(spec["mac"])
    except InvalidAddressFormatError as exc:
        raise HostsValidationError(f"Host '{name}' in {source}: {exc}") from exc
    protocol = spec.get("protocol")
    return HostEntry(
        name=name,
        mac=str(mac),
        interface=spec.get("interface"),
        protocol=WakeProtocol(protocol) if protocol else None,
    )


def load_hosts(path: Path | None = None) -> LoadedHosts:
    """Load settings and host aliases; a missing file yields defaults."""
    source = path or default_hosts_path()
    if not source.exists():
        if path is not None:
            raise HostsLoadError(f"Hosts file {source} does not exist")
        LOGGER.debug("No hosts file at %s, using defaults", source)
        return LoadedHosts(config=WakeConfig(), hosts={})

    doc = _read_yaml(source)
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        where = ".".join(str(p) for p in exc.path)
        where = f" ({where})" if where else ""
        raise HostsValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    hosts: dict[str, HostEntry] = {}
    for name, spec in (doc.get("hosts") or {}).items():
        hosts[str(name)] = _build_host(str(name), spec, source)

    if not hosts:
        LOGGER.warning("Hosts file %s defines no hosts", source)

    return LoadedHosts(config=_build_config(doc.get("settings") or {}), hosts=hosts)
