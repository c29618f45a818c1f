"""Mutable pool configuration shared by all pool flavors.

PoolConfig holds the attributes every pool engine reads at construction time:
ordering, wait timeout, eviction timing, validation flags and diagnostic
naming. It is plain data:

- Every attribute can be read and assigned directly
- No value is ever range checked or rejected; interpreting odd values
  (negative eviction intervals, negative test counts) is the engine's job
- copy() gives the engine an independent snapshot so later caller mutation
  does not leak into a running pool

GenericPoolConfig embeds a PoolConfig and adds the capacity limits of a
generic configurable pool.

Example:
    config = PoolConfig(max_wait_millis=5000)
    config.test_on_borrow = True
    snapshot = config.copy()
"""

from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping
import copy
import json
import logging

logger = logging.getLogger(__name__)

DEFAULT_LIFO = True
DEFAULT_MAX_WAIT_MILLIS = -1                              # block indefinitely
DEFAULT_MIN_EVICTABLE_IDLE_TIME_MILLIS = 1000 * 60 * 30   # 30 minutes
DEFAULT_SOFT_MIN_EVICTABLE_IDLE_TIME_MILLIS = -1          # disabled
DEFAULT_NUM_TESTS_PER_EVICTION_RUN = 3
DEFAULT_EVICTION_POLICY_NAME = "default"
DEFAULT_TEST_ON_BORROW = False
DEFAULT_TEST_ON_RETURN = False
DEFAULT_TEST_WHILE_IDLE = False
DEFAULT_TIME_BETWEEN_EVICTION_RUNS_MILLIS = -1            # no background eviction
DEFAULT_BLOCK_WHEN_EXHAUSTED = True
DEFAULT_JMX_ENABLED = True
DEFAULT_JMX_NAME_PREFIX = "pool"

DEFAULT_MAX_TOTAL = 8
DEFAULT_MAX_IDLE = 8
DEFAULT_MIN_IDLE = 0

# Key spellings used by existing pool configuration files
_KEY_ALIASES = {
    "lifo": "lifo",
    "maxWait": "max_wait_millis",
    "maxWaitMillis": "max_wait_millis",
    "max_wait": "max_wait_millis",
    "minEvictableIdleTimeMillis": "min_evictable_idle_time_millis",
    "softMinEvictableIdleTimeMillis": "soft_min_evictable_idle_time_millis",
    "numTestsPerEvictionRun": "num_tests_per_eviction_run",
    "evictionPolicyClassName": "eviction_policy_name",
    "evictionPolicyName": "eviction_policy_name",
    "eviction_policy": "eviction_policy_name",
    "testOnBorrow": "test_on_borrow",
    "testOnReturn": "test_on_return",
    "testWhileIdle": "test_while_idle",
    "timeBetweenEvictionRunsMillis": "time_between_eviction_runs_millis",
    "blockWhenExhausted": "block_when_exhausted",
    "jmxEnabled": "jmx_enabled",
    "jmxNamePrefix": "jmx_name_prefix",
    "maxTotal": "max_total",
    "maxIdle": "max_idle",
    "minIdle": "min_idle",
}


def _normalize_keys(d: Mapping[str, Any]) -> Dict[str, Any]:
    """Map camelCase and legacy keys onto field names. Unknown keys pass through."""
    return {_KEY_ALIASES.get(key, key): value for key, value in d.items()}


def _load_json(path: Path) -> Dict[str, Any]:
    with open(path) as f:
        return json.load(f)


@dataclass
class PoolConfig:
    """
    Attributes shared by all pool flavors.

    Attributes:
        lifo: True lends the most recently returned object first, False the longest idle
        max_wait_millis: How long a borrow may block when exhausted (-1 = forever)
        min_evictable_idle_time_millis: Idle time before an object may be evicted
        soft_min_evictable_idle_time_millis: Idle time before eviction while more than
            min_idle spares exist (-1 = fall back to min_evictable_idle_time_millis)
        num_tests_per_eviction_run: Objects examined per eviction run
        eviction_policy_name: Registered eviction policy the engine should use
        test_on_borrow: Validate objects before lending them
        test_on_return: Validate objects when they come back
        test_while_idle: Validate idle objects during eviction runs
        time_between_eviction_runs_millis: Eviction run interval (-1 = no evictor)
        block_when_exhausted: Block (up to max_wait_millis) instead of failing fast
        jmx_enabled: Register diagnostic introspection
        jmx_name_prefix: Prefix for diagnostic registration names
    """
    lifo: bool = DEFAULT_LIFO
    max_wait_millis: int = DEFAULT_MAX_WAIT_MILLIS
    min_evictable_idle_time_millis: int = DEFAULT_MIN_EVICTABLE_IDLE_TIME_MILLIS
    soft_min_evictable_idle_time_millis: int = DEFAULT_SOFT_MIN_EVICTABLE_IDLE_TIME_MILLIS
    num_tests_per_eviction_run: int = DEFAULT_NUM_TESTS_PER_EVICTION_RUN
    eviction_policy_name: str = DEFAULT_EVICTION_POLICY_NAME
    test_on_borrow: bool = DEFAULT_TEST_ON_BORROW
    test_on_return: bool = DEFAULT_TEST_ON_RETURN
    test_while_idle: bool = DEFAULT_TEST_WHILE_IDLE
    time_between_eviction_runs_millis: int = DEFAULT_TIME_BETWEEN_EVICTION_RUNS_MILLIS
    block_when_exhausted: bool = DEFAULT_BLOCK_WHEN_EXHAUSTED
    jmx_enabled: bool = DEFAULT_JMX_ENABLED
    jmx_name_prefix: str = DEFAULT_JMX_NAME_PREFIX

    def copy(self) -> "PoolConfig":
        """Independent duplicate with the same field values."""
        return replace(self)

    def effective_soft_min_evictable_idle_time_millis(self) -> int:
        """Soft eviction threshold, falling back to the hard one when disabled."""
        if self.soft_min_evictable_idle_time_millis < 0:
            return self.min_evictable_idle_time_millis
        return self.soft_min_evictable_idle_time_millis

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "PoolConfig":
        """Create config from dictionary. Missing keys keep their defaults."""
        d = _normalize_keys(d)
        names = {f.name for f in fields(cls)}
        ignored = sorted(set(d) - names)
        if ignored:
            logger.debug("Ignoring unknown pool config keys: %s", ", ".join(ignored))
        return cls(**{key: value for key, value in d.items() if key in names})

    @classmethod
    def from_json(cls, path: Path) -> "PoolConfig":
        """Load config from JSON file."""
        return cls.from_dict(_load_json(path))


@dataclass
class GenericPoolConfig:
    """
    Setup for a generic configurable pool.

    The shared attributes live in `base`; this type only adds capacity limits.
    Like PoolConfig, nothing here is validated.
    """
    base: PoolConfig = field(default_factory=PoolConfig)
    max_total: int = DEFAULT_MAX_TOTAL
    max_idle: int = DEFAULT_MAX_IDLE
    min_idle: int = DEFAULT_MIN_IDLE

    def copy(self) -> "GenericPoolConfig":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Flat mapping with base attributes alongside capacity limits."""
        d = self.base.to_dict()
        d.update(max_total=self.max_total, max_idle=self.max_idle, min_idle=self.min_idle)
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "GenericPoolConfig":
        d = _normalize_keys(d)
        return cls(
            base=PoolConfig.from_dict({k: v for k, v in d.items()
                                       if k not in ("max_total", "max_idle", "min_idle")}),
            max_total=d.get("max_total", DEFAULT_MAX_TOTAL),
            max_idle=d.get("max_idle", DEFAULT_MAX_IDLE),
            min_idle=d.get("min_idle", DEFAULT_MIN_IDLE),
        )

    @classmethod
    def from_json(cls, path: Path) -> "GenericPoolConfig":
        return cls.from_dict(_load_json(path))
