"""
PassGuard Configuration
========================

Dataclass configuration tree read from a TOML file with two tables::

    [global]    # logging
    [policy]    # password policy and strength-score parameters

Keys absent from the file keep their defaults and unknown keys are
ignored, so a config file written for a newer release still loads.
See ``config.example.toml`` for every option.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines, Section 5.1.1.
    - TOML v1.0.0. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# config.toml next to the packages
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"

DEFAULT_SPECIAL_CHARACTERS: str = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"


# ========================== Policy Settings ================================


@dataclass(frozen=True, slots=True)
class PolicyConfig:
    """Parameters of the password policy and the strength heuristic.

    Frozen so that an engine built from it can be shared across threads
    without synchronisation.

    Raises:
        ValueError: On inconsistent bounds (``min_length > max_length``,
            ``run_length < 2``, negative penalties).

    Reference:
        NIST SP 800-63B (2017), Section 5.1.1.2 -- Memorized Secret
        Verifiers (length bounds, blocklists, repetitive/sequential strings).
    """

    min_length: int = 12
    max_length: int = 128
    run_length: int = 4  # sequences and repeats of this size are rejected
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS
    extra_common_passwords: tuple[str, ...] = ()

    # Score penalties
    dictionary_penalty: int = 30
    sequence_penalty: int = 20
    repetition_penalty: int = 20

    def __post_init__(self) -> None:
        if not 1 <= self.min_length <= self.max_length:
            raise ValueError(
                f"policy.min_length ({self.min_length}) must be between 1 "
                f"and policy.max_length ({self.max_length})"
            )
        if self.run_length < 2:
            raise ValueError("policy.run_length must be at least 2")
        if not self.special_characters:
            raise ValueError("policy.special_characters must not be empty")
        penalties = (self.dictionary_penalty, self.sequence_penalty, self.repetition_penalty)
        if min(penalties) < 0:
            raise ValueError("policy penalties must not be negative")


# =========================== Global Settings ===============================


@dataclass(slots=True)
class GlobalConfig:
    """Logging settings."""

    log_level: str = "INFO"
    log_file: str = ""  # empty: no log file
    log_json: bool = False
    debug: bool = False  # forces DEBUG logging


# =========================== Root Config ===================================


def _section(cls: type, name: str, table: Mapping[str, Any]) -> Any:
    """Instantiate *cls* from the known keys of TOML table *name*.

    Each value must have the type of the field default; bools are not
    accepted where an int is expected.
    """
    values: dict[str, Any] = {}
    for spec in fields(cls):
        if spec.name not in table:
            continue
        value = table[spec.name]
        expected = type(spec.default)
        if not isinstance(value, expected) or (
            isinstance(value, bool) and expected is not bool
        ):
            raise ValueError(
                f"[{name}] {spec.name} must be of type {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        values[spec.name] = value
    return cls(**values)


@dataclass(slots=True)
class GuardConfig:
    """Root configuration: ``global_settings`` and ``policy``.

    Usage::

        config = GuardConfig.load()                # ./config.toml or defaults
        config = GuardConfig.load("strict.toml")
        config.policy.min_length                   # 12 unless overridden
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> GuardConfig:
        """Read a TOML file into a :class:`GuardConfig`.

        Without *path*, ``config.toml`` in the project root is used when it
        exists and built-in defaults otherwise.

        Raises:
            FileNotFoundError: *path* was given but does not exist.
            ValueError: Malformed TOML, a value of the wrong type, or
                inconsistent ``[policy]`` values.
        """
        if path is None:
            if not _DEFAULT_CONFIG_PATH.is_file():
                return cls()
            source = _DEFAULT_CONFIG_PATH
        else:
            source = Path(path)
            if not source.is_file():
                raise FileNotFoundError(f"PassGuard config not found: {source}")

        document = tomllib.loads(source.read_text(encoding="utf-8"))
        return cls.from_mapping(document)

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any]) -> GuardConfig:
        """Build from an already parsed ``{"global": ..., "policy": ...}`` mapping."""
        policy = dict(document.get("policy", {}))
        words = policy.get("extra_common_passwords")
        if words is not None:
            if not isinstance(words, (list, tuple)) or not all(
                isinstance(w, str) for w in words
            ):
                raise ValueError(
                    "[policy] extra_common_passwords must be a list of strings"
                )
            policy["extra_common_passwords"] = tuple(w.lower() for w in words)
        return cls(
            global_settings=_section(GlobalConfig, "global", document.get("global", {})),
            policy=_section(PolicyConfig, "policy", policy),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_cached: Optional[GuardConfig] = None


def get_config(path: str | Path | None = None) -> GuardConfig:
    """Process-wide configuration; loaded once, or reloaded when *path* is given."""
    global _cached
    if _cached is None or path is not None:
        _cached = GuardConfig.load(path)
    return _cached
