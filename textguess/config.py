"""
Configuration sources and deltas.

A guess reads a partial configuration (``ConfigSource``) and answers with the
settings it could infer (``ConfigDiff``). Both wrap a plain, JSON-compatible
``dict``; nested sections such as ``parser`` are nested dicts.
"""

from __future__ import annotations

import copy
import json
import logging
import typing
from pathlib import Path
from typing import Any, TypeVar

from textguess.exceptions import ConfigError

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D", bound="DataSource")

# Marker for "no default given", distinct from an explicit default of None
_REQUIRED = object()


def _merge_into(target: dict, other: typing.Mapping) -> None:
    for key, value in other.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, typing.Mapping):
            _merge_into(current, value)
        elif isinstance(value, typing.Mapping):
            target[key] = copy.deepcopy(dict(value))
        else:
            target[key] = copy.deepcopy(value)


class DataSource:
    """A mutable mapping of configuration keys to JSON-compatible values."""

    def __init__(self, data: typing.Mapping[str, Any] | None = None):
        if data is None:
            data = {}
        if not isinstance(data, typing.Mapping):
            raise ConfigError(
                f"{type(self).__name__} expects a mapping, got {type(data).__name__}"
            )
        self._data: dict[str, Any] = copy.deepcopy(dict(data))

    def get(self, type_: type[T], key: str, default: Any = _REQUIRED) -> T:
        """
        Return the value under ``key`` as ``type_``.

        A missing key or a ``None`` value yields ``default``. Without a default
        the key is required and ``ConfigError`` is raised. A value that is not an
        instance of ``type_`` also raises ``ConfigError``.
        """
        value = self._data.get(key)
        if value is None:
            if default is _REQUIRED:
                raise ConfigError(f"Required field '{key}' is not set")
            return default

        # bool is an int subclass but never a valid int or str setting
        if isinstance(value, bool) and type_ is not bool:
            raise ConfigError(
                f"Field '{key}' must be {type_.__name__}, got bool"
            )
        if not isinstance(value, type_):
            raise ConfigError(
                f"Field '{key}' must be {type_.__name__}, got {type(value).__name__}"
            )
        return value

    def is_set(self, key: str) -> bool:
        """True when ``key`` is present with a non-None value."""
        return self._data.get(key) is not None

    def is_empty(self) -> bool:
        return not self._data

    def get_nested_or_empty(self: D, key: str) -> D:
        """
        Return the nested section under ``key``.

        An absent or ``None`` section yields an empty instance; anything other
        than a mapping raises ``ConfigError``.
        """
        value = self._data.get(key)
        if value is None:
            return type(self)()
        if not isinstance(value, typing.Mapping):
            raise ConfigError(f"Field '{key}' must be an object")
        return type(self)(value)

    def merge(self: D, other: DataSource | typing.Mapping[str, Any]) -> D:
        """Deep-merge ``other`` into this source. Values of ``other`` win."""
        if isinstance(other, DataSource):
            other = other._data
        _merge_into(self._data, other)
        return self

    def deep_copy(self: D) -> D:
        return type(self)(self._data)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def to_json(self) -> str:
        return json.dumps(self._data, ensure_ascii=False, sort_keys=True)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DataSource):
            return self._data == other._data
        if isinstance(other, dict):
            return self._data == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


class ConfigSource(DataSource):
    """Partial configuration handed to a guess plugin."""

    @classmethod
    def from_json_file(cls, path: str | Path) -> ConfigSource:
        path = Path(path)
        logger.debug("Loading config from %s", path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON config: {path}", cause=exc) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be an object: {path}")
        return cls(data)


class ConfigDiff(DataSource):
    """Settings inferred by a guess. An empty diff means "no guess"."""


def new_config_diff(data: typing.Mapping[str, Any] | None = None) -> ConfigDiff:
    return ConfigDiff(data)
