"""Feature Flags - known flags and the read-only router consulted at request time.

Invariants:
    - The router is built once per process and never mutated afterwards
    - Precedence per flag: environment (COMMERCE_FF_<KEY>) > settings.feature_flags > default
    - Unknown keys in settings are logged and ignored
    - Pure module: environment is passed in, never read here

Design Decisions:
    - MappingProxyType over a plain dict: accidental writes raise instead of leaking
      state across requests
    - Flags are plain dataclasses in a tuple registry, looked up by key
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

logger = logging.getLogger(__name__)

ENV_PREFIX = "COMMERCE_FF_"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class FeatureFlag:
    """A named boolean toggle for an experimental field or behavior."""
    key: str
    description: str
    default: bool = False

    @property
    def env_key(self) -> str:
        return f"{ENV_PREFIX}{self.key.upper()}"


TAX_INCLUSIVE_PRICING = FeatureFlag(
    key="tax_inclusive_pricing",
    description="[EXPERIMENTAL] Tax included in prices of currencies and shipping options",
)

KNOWN_FLAGS: tuple[FeatureFlag, ...] = (TAX_INCLUSIVE_PRICING,)


class FeatureFlagRouter:
    """Answers is_feature_enabled() from a frozen flag snapshot."""

    def __init__(self, flags: Mapping[str, bool] | None = None):
        self._flags = MappingProxyType(dict(flags or {}))

    def is_feature_enabled(self, key: str) -> bool:
        return self._flags.get(key, False)

    def enabled_flags(self) -> list[str]:
        return sorted(k for k, v in self._flags.items() if v)

    def as_dict(self) -> dict[str, bool]:
        return dict(self._flags)


def parse_flag_value(raw: str) -> bool | None:
    """Parse an env string; None when it is not a recognizable boolean."""
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return None


def load_feature_flags(
    configured: Mapping[str, bool],
    environ: Mapping[str, str],
    known: Iterable[FeatureFlag] = KNOWN_FLAGS,
) -> FeatureFlagRouter:
    """Resolve every known flag into a FeatureFlagRouter."""
    known = tuple(known)
    known_keys = {flag.key for flag in known}
    for key in configured:
        if key not in known_keys:
            logger.warning("Ignoring unknown feature flag %r", key)

    resolved: dict[str, bool] = {}
    for flag in known:
        value = flag.default
        if flag.key in configured:
            value = bool(configured[flag.key])
        raw = environ.get(flag.env_key)
        if raw is not None:
            parsed = parse_flag_value(raw)
            if parsed is None:
                logger.warning(
                    "Invalid boolean %r for %s, keeping %s", raw, flag.env_key, value,
                )
            else:
                value = parsed
        resolved[flag.key] = value
    return FeatureFlagRouter(resolved)
