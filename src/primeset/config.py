from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:
    import tomli as toml  # type: ignore

from primeset.utility import UserInputError

ENV_VAR = "PRIMESET_CONFIG"

# dotted key -> expected type
KNOWN_KEYS: dict[str, type] = {
    "BEHAVIOUR.DEBUG": bool,
    "LIMITS.STRICT_U64": bool,
}


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().

      - name:        [PROFILE] name, or the file stem
      - description: one-line description from [PROFILE] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def config_path() -> Path | None:
    """Profile named by $PRIMESET_CONFIG, or None when unset."""
    env = os.environ.get(ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return None


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None
    except OSError as e:
        raise UserInputError(f"reading {path}: {e.strerror or e}.") from None


# --- Metadata handling -----------------------------------------------------


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    if "PROFILE" in raw:
        raw = {k: v for k, v in raw.items() if k != "PROFILE"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))

    return raw, name, description


def _validate(data: dict[str, Any], source: str) -> None:
    for key, typ in KNOWN_KEYS.items():
        section, _, leaf = key.partition(".")
        block = data.get(section)
        if block is None:
            continue
        if not isinstance(block, dict):
            raise UserInputError(f"{source}: [{section}] must be a table.")
        if leaf in block and not isinstance(block[leaf], typ):
            raise UserInputError(
                f"{source}: {key} must be {typ.__name__}, got {type(block[leaf]).__name__}."
            )


# --- Public API ------------------------------------------------------------


def load_settings(path: str | os.PathLike[str] | None = None) -> Settings:
    """
    Load a TOML profile (default: $PRIMESET_CONFIG), strip the [PROFILE]
    metadata, check the known keys and return Settings. Nothing is applied;
    pass the result to runtime.APPLY().

    Without a path and without $PRIMESET_CONFIG an empty "default" profile is
    returned.
    """
    p = Path(path).expanduser() if path is not None else config_path()
    if p is None:
        return Settings(data={}, name="default", description="(no description)")
    if not p.exists():
        raise UserInputError(f"Profile not found at {p}.")

    raw = _load_toml(p)
    data, resolved_name, description = _split_profile_data(raw, p.stem)
    _validate(data, p.name)

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=p,
    )
