"""Immutable configuration for the bounded stack pool."""

from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_SLEEPING = 8
# Sizes the backing container only, the pool is not pre-populated
DEFAULT_INIT_IDLE_CAPACITY = 4


@dataclass(frozen=True)
class StackPoolConfig:
    """
    Capacity settings for a stack pool.

    Out of range values are replaced with defaults rather than rejected:
    a negative max_sleeping becomes 8 and an init_idle_capacity below 1
    becomes 4. A max_sleeping of 0 is kept (never retain idle instances).

    Attributes:
        max_sleeping: Cap on idle ("sleeping") instances retained
        init_idle_capacity: Initial size hint for the idle container
    """
    max_sleeping: int = DEFAULT_MAX_SLEEPING
    init_idle_capacity: int = DEFAULT_INIT_IDLE_CAPACITY

    def __post_init__(self):
        if self.max_sleeping < 0:
            logger.debug("max_sleeping=%d is negative, using %d", self.max_sleeping, DEFAULT_MAX_SLEEPING)
            object.__setattr__(self, "max_sleeping", DEFAULT_MAX_SLEEPING)
        if self.init_idle_capacity < 1:
            logger.debug("init_idle_capacity=%d is below 1, using %d",
                         self.init_idle_capacity, DEFAULT_INIT_IDLE_CAPACITY)
            object.__setattr__(self, "init_idle_capacity", DEFAULT_INIT_IDLE_CAPACITY)

    @staticmethod
    def builder() -> "StackPoolConfigBuilder":
        return StackPoolConfigBuilder()


class StackPoolConfigBuilder:
    """
    Fluent builder for StackPoolConfig.

    Example:
        config = StackPoolConfig.builder().set_max_sleeping(0).set_init_idle_capacity(10).create_config()
    """

    def __init__(self):
        self.max_sleeping = DEFAULT_MAX_SLEEPING
        self.init_idle_capacity = DEFAULT_INIT_IDLE_CAPACITY

    def set_max_sleeping(self, max_sleeping: int) -> "StackPoolConfigBuilder":
        self.max_sleeping = max_sleeping
        return self

    def set_init_idle_capacity(self, init_idle_capacity: int) -> "StackPoolConfigBuilder":
        self.init_idle_capacity = init_idle_capacity
        return self

    def create_config(self) -> StackPoolConfig:
        """Build a config from the current values. The builder can be reused."""
        return StackPoolConfig(self.max_sleeping, self.init_idle_capacity)

    @staticmethod
    def create_default_config() -> StackPoolConfig:
        return StackPoolConfigBuilder().create_config()
