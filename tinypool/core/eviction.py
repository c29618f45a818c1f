"""Eviction policies selected by name.

A pool config names its policy through `eviction_policy_name`. The engine
resolves that name against a registry of policy factories when the pool is
built; the config itself never checks the name.

Built-in policies:
- "default": evict once the hard idle threshold is exceeded, or the soft one
  while more than min_idle objects are idle
- "never": keep every idle object
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Protocol
import logging

from .config import DEFAULT_MIN_IDLE, PoolConfig

logger = logging.getLogger(__name__)

# Thresholds <= 0 disable the corresponding check
_NEVER = float("inf")


@dataclass(frozen=True)
class EvictionThresholds:
    """Idle-time limits an eviction run compares against."""
    idle_evict_time_millis: float
    idle_soft_evict_time_millis: float
    min_idle: int = DEFAULT_MIN_IDLE

    @classmethod
    def from_config(cls, config: PoolConfig, min_idle: int = DEFAULT_MIN_IDLE) -> "EvictionThresholds":
        hard = config.min_evictable_idle_time_millis
        soft = config.effective_soft_min_evictable_idle_time_millis()
        return cls(
            idle_evict_time_millis=hard if hard > 0 else _NEVER,
            idle_soft_evict_time_millis=soft if soft > 0 else _NEVER,
            min_idle=min_idle,
        )


@dataclass(frozen=True)
class EvictionContext:
    """State of one idle object under test."""
    idle_time_millis: int
    idle_count: int


class EvictionPolicy(Protocol):
    def evict(self, thresholds: EvictionThresholds, context: EvictionContext) -> bool: ...


class DefaultEvictionPolicy:
    """Evict on the hard threshold, or on the soft one while spares exceed min_idle."""

    def evict(self, thresholds: EvictionThresholds, context: EvictionContext) -> bool:
        idle = context.idle_time_millis
        if thresholds.idle_soft_evict_time_millis < idle and thresholds.min_idle < context.idle_count:
            return True
        return thresholds.idle_evict_time_millis < idle


class NeverEvictPolicy:
    def evict(self, thresholds: EvictionThresholds, context: EvictionContext) -> bool:
        return False


_POLICY_FACTORIES: Dict[str, Callable[[], EvictionPolicy]] = {
    "default": DefaultEvictionPolicy,
    "never": NeverEvictPolicy,
}


def register_eviction_policy(name: str, factory: Callable[[], EvictionPolicy]) -> None:
    """Register (or replace) a policy factory under `name`."""
    if not name:
        raise ValueError("Eviction policy name must be a non-empty string")
    if name in _POLICY_FACTORIES:
        logger.debug("Replacing eviction policy %r", name)
    _POLICY_FACTORIES[name] = factory


def available_eviction_policies() -> List[str]:
    return sorted(_POLICY_FACTORIES)


def get_eviction_policy(name: str) -> EvictionPolicy:
    """Instantiate the policy registered under `name`."""
    factory = _POLICY_FACTORIES.get(name)
    if factory is None:
        raise ValueError(
            f"Unknown eviction policy {name!r}, expected one of: {', '.join(available_eviction_policies())}"
        )
    return factory()


def resolve_eviction_policy(config: PoolConfig) -> EvictionPolicy:
    """Instantiate the policy a config names."""
    policy = get_eviction_policy(config.eviction_policy_name)
    logger.debug("Resolved eviction policy %r -> %s", config.eviction_policy_name, type(policy).__name__)
    return policy
