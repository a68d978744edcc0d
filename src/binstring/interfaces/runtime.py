"""Interface for the host runtime.

The host runtime is the process environment the facade runs in. It reports
configuration settings, may be able to load the multibyte subsystem, and
hands out the primitives that plain calls reach (overloaded or not) and,
when it still keeps them, the original byte primitives.
"""

import abc

from .multibyte import MultiByteSubsystem
from .primitives import PrimitiveSet

# Setting holding the overload bitmask.
FUNC_OVERLOAD_SETTING = "func_overload"


class HostRuntime(abc.ABC):
    """Contract for the process environment seen by capability detection."""

    @abc.abstractmethod
    def setting(self, key: str) -> str | None:
        """Return a configuration setting as text, or None if unknown."""

    @abc.abstractmethod
    def load_multibyte(self) -> MultiByteSubsystem | None:
        """Return the multibyte subsystem, loading it on first use.

        Never raises: a subsystem that cannot be loaded is reported as None.
        """

    @property
    @abc.abstractmethod
    def plain(self) -> PrimitiveSet:
        """Primitives reached by plain calls, overloaded families included."""

    @property
    @abc.abstractmethod
    def original(self) -> PrimitiveSet | None:
        """The original byte primitives if still reachable, else None."""
