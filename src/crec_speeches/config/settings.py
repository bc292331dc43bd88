"""Application configuration helpers for the Congressional Record crawler."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
import types
from typing import Any, Dict, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints

from ..core.sessions import DEFAULT_CONGRESS_SESSION


_DEFAULT_CONFIG_LOCATIONS = (
    Path("crec_speeches.json"),
    Path.home() / ".config" / "crec_speeches" / "config.json",
)


@dataclass(slots=True)
class GovInfoConfig:
    """Configuration for the govinfo API."""

    base_url: str = "https://api.govinfo.gov"
    api_key: Optional[str] = None
    timeout: float = 60.0
    search_page_size: int = 1000
    granule_page_size: int = 1000
    historical: bool = True


@dataclass(slots=True)
class CrawlConfig:
    """Which part of the Congressional Record to crawl."""

    congress_session: int = DEFAULT_CONGRESS_SESSION
    max_results: Optional[int] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    keep_empty_speeches: bool = True


@dataclass(slots=True)
class StorageConfig:
    """Configuration for the local SQLite database."""

    database_url: str = "sqlite:///crec_speeches.db"
    echo_sql: bool = False


@dataclass(slots=True)
class AppConfig:
    """High level application configuration."""

    govinfo: GovInfoConfig
    crawl: CrawlConfig
    storage: StorageConfig


def _load_from_env(prefix: str) -> Dict[str, Any]:
    """Load configuration entries for ``prefix`` from the environment."""

    data: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if key.startswith(prefix):
            normalized_key = key.removeprefix(prefix)
            data[normalized_key.lower()] = value
    return data


def _merge_dict(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    merged = target.copy()
    merged.update({k: v for k, v in updates.items() if v is not None})
    return merged


def _load_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf8") as fh:
        return json.load(fh)


T = TypeVar("T")


def _coerce_value(value: Any, annotation: Any) -> Any:
    """Best-effort conversion of ``value`` to match ``annotation``."""

    if value is None:
        return None

    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]  # noqa: E721 - allow Optional
        if not args:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        last_error: Exception | None = None
        for candidate in args:
            try:
                return _coerce_value(value, candidate)
            except (TypeError, ValueError) as exc:
                last_error = exc
        raise ValueError(f"Cannot convert {value!r} to {annotation}") from last_error

    target_type = origin or annotation

    if target_type in {Any, object}:
        return value

    if target_type is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in {"true", "1", "yes", "y", "on"}:
                return True
            if normalized in {"false", "0", "no", "n", "off"}:
                return False
        if isinstance(value, (int, float)):
            return bool(value)
        raise ValueError(f"Cannot convert {value!r} to bool")

    if target_type is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, (float, str)):
            return int(float(value))
        raise ValueError(f"Cannot convert {value!r} to int")

    if target_type is float:
        if isinstance(value, (int, float, str)):
            return float(value)
        raise ValueError(f"Cannot convert {value!r} to float")

    if target_type is str:
        if isinstance(value, str):
            return value
        return str(value)

    return value


def _dataclass_from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    """Create dataclass ``cls`` while coercing ``data`` to the proper types."""

    kwargs: Dict[str, Any] = {}
    type_hints = get_type_hints(cls)
    for field in fields(cls):
        if field.name not in data:
            continue
        try:
            annotation = type_hints.get(field.name, field.type)
            kwargs[field.name] = _coerce_value(data[field.name], annotation)
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"Invalid value for {cls.__name__}.{field.name}: {data[field.name]!r}"
            ) from exc
    return cls(**kwargs)


def resolve_config_path(explicit_path: Optional[Path] = None) -> Path:
    """Return the effective configuration file path.

    If ``explicit_path`` is provided it is returned verbatim. Otherwise the
    first existing default location wins; without any existing file the
    XDG-style path ``~/.config/crec_speeches/config.json`` is returned.
    """

    if explicit_path:
        return explicit_path

    for candidate in _DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    return _DEFAULT_CONFIG_LOCATIONS[-1]


def load_config(explicit_path: Optional[Path] = None) -> AppConfig:
    """Create the application configuration.

    Defaults, an optional JSON configuration file and ``CREC_*`` environment
    variables are merged into one :class:`AppConfig`. Environment variable
    names use the format ``CREC_SECTION_FIELD`` (e.g. ``CREC_GOVINFO_API_KEY``).
    """

    base = {
        "govinfo": asdict(GovInfoConfig()),
        "crawl": asdict(CrawlConfig()),
        "storage": asdict(StorageConfig()),
    }

    file_data: Dict[str, Any] = {}
    if explicit_path:
        file_data = _load_config_file(explicit_path)
    else:
        for candidate in _DEFAULT_CONFIG_LOCATIONS:
            file_data = _load_config_file(candidate)
            if file_data:
                break

    merged = _merge_dict(base, file_data)

    govinfo_data = _merge_dict(merged.get("govinfo", {}), _load_from_env("CREC_GOVINFO_"))
    crawl_data = _merge_dict(merged.get("crawl", {}), _load_from_env("CREC_CRAWL_"))
    storage_data = _merge_dict(merged.get("storage", {}), _load_from_env("CREC_STORAGE_"))

    return AppConfig(
        govinfo=_dataclass_from_dict(GovInfoConfig, govinfo_data),
        crawl=_dataclass_from_dict(CrawlConfig, crawl_data),
        storage=_dataclass_from_dict(StorageConfig, storage_data),
    )


def save_config(config: AppConfig, path: Optional[Path] = None) -> Path:
    """Persist ``config`` as JSON and return the target path."""

    target = resolve_config_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "govinfo": asdict(config.govinfo),
        "crawl": asdict(config.crawl),
        "storage": asdict(config.storage),
    }
    with target.open("w", encoding="utf8") as fh:
        json.dump(data, fh, ensure_ascii=False, indent=2, sort_keys=True)
        fh.write("\n")
    return target


__all__ = [
    "AppConfig",
    "CrawlConfig",
    "GovInfoConfig",
    "StorageConfig",
    "load_config",
    "resolve_config_path",
    "save_config",
]
