"""Core components for tinypool."""

from .config import PoolConfig, GenericPoolConfig
from .stack_config import StackPoolConfig, StackPoolConfigBuilder
from .eviction import (
    DefaultEvictionPolicy,
    EvictionContext,
    EvictionThresholds,
    NeverEvictPolicy,
    get_eviction_policy,
    register_eviction_policy,
    resolve_eviction_policy,
)
