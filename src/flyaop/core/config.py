# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Layered configuration: packaged defaults, YAML files, profiles and env vars.

Keys use dot notation (``flyaop.server.port``). At read time an environment
variable named after the key wins over file values: the ``flyaop.`` prefix
is replaced by ``FLYAOP_`` and dots and dashes become underscores, so
``flyaop.users.aspect-enabled`` is overridden by
``FLYAOP_USERS_ASPECT_ENABLED``.

String values may reference other keys or env vars with ``${name}`` and
``${name:default}``.
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

DEFAULTS_PACKAGE = "flyaop.resources"
DEFAULTS_FILE = "flyaop-defaults.yaml"

_PREFIX_ATTR = "__flyaop_config_prefix__"
_PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")
_MAX_PLACEHOLDER_DEPTH = 10


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Declare the config section a dataclass binds to via :meth:`Config.bind`.

    Usage::

        @config_properties(prefix="flyaop.server")
        @dataclass
        class ServerProperties:
            host: str = "0.0.0.0"
            port: int = 8080
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def env_var_for(key: str) -> str:
    """``flyaop.users.aspect-enabled`` -> ``FLYAOP_USERS_ASPECT_ENABLED``."""
    name = key.removeprefix("flyaop.")
    return "FLYAOP_" + re.sub(r"[.\-]", "_", name).upper()


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("true", "1", "yes", "on")


_STRING_COERCIONS: dict[Any, Callable[[str], Any]] = {int: int, float: float, bool: _parse_bool}


def _merged(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in overlay.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = _merged(current, value)
        else:
            result[key] = value
    return result


def _read_yaml(text: str) -> dict[str, Any]:
    return yaml.safe_load(text) or {}


class Config:
    """Read-only view over merged configuration data."""

    def __init__(self, data: dict[str, Any] | None = None, sources: Iterable[str] = ()) -> None:
        self._data: dict[str, Any] = data or {}
        self._sources = list(sources)

    @classmethod
    def from_file(
        cls,
        path: str | Path | None = None,
        active_profiles: Iterable[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Merge configuration layers, later layers winning.

        1. ``flyaop-defaults.yaml`` shipped in :mod:`flyaop.resources`
        2. *path*, if the file exists
        3. ``<stem>-<profile><suffix>`` next to *path* for each active profile
        """
        data: dict[str, Any] = {}
        sources: list[str] = []

        if load_defaults:
            defaults = importlib.resources.files(DEFAULTS_PACKAGE).joinpath(DEFAULTS_FILE)
            data = _read_yaml(defaults.read_text())
            sources.append(f"{DEFAULTS_FILE} (framework defaults)")

        if path is not None:
            base = Path(path)
            layers = [(base, "")]
            for profile in active_profiles or ():
                layers.append((base.with_name(f"{base.stem}-{profile}{base.suffix}"), f" (profile: {profile})"))
            for layer, note in layers:
                if layer.is_file():
                    data = _merged(data, _read_yaml(layer.read_text()))
                    sources.append(f"{layer}{note}")

        return cls(data, sources)

    @property
    def loaded_sources(self) -> list[str]:
        """Files that contributed to this config, in merge order."""
        return list(self._sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        """Value at *key*, with env overrides and placeholders applied."""
        override = os.environ.get(env_var_for(key))
        if override is not None:
            return override

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str):
            return self._expand(value)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Raw mapping under *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` dataclass from its section.

        Dashed YAML keys bind to underscored fields. String values (from env
        vars or placeholders) are converted for ``int``, ``float`` and
        ``bool`` fields. Missing keys keep the dataclass default.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        yaml_keys = {key.replace("-", "_"): key for key in self.get_section(prefix)}
        hints = get_type_hints(config_cls)
        values: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{yaml_keys.get(field.name, field.name)}")
            if value is None:
                continue
            coerce = _STRING_COERCIONS.get(hints.get(field.name))
            values[field.name] = coerce(value) if coerce and isinstance(value, str) else value
        return config_cls(**values)

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def _expand(self, value: str, depth: int = 0) -> str:
        if "${" not in value:
            return value
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders nested too deeply in '{value}'; check for circular references")

        def substitute(match: re.Match[str]) -> str:
            name, default = match.group("name"), match.group("default")
            from_env = os.environ.get(name)
            if from_env is not None:
                return from_env
            referenced = self._lookup(name)
            if referenced is not None:
                return self._expand(str(referenced), depth + 1)
            if default is not None:
                return default
            raise ValueError(f"Cannot resolve placeholder '${{{name}}}': not found in environment or config")

        return _PLACEHOLDER.sub(substitute, value)
