"""Process-wide state shared by the SDK components.

The host application owns this state and mutates it; library code only
reads it, and always reads it at the moment it needs it.
"""
import os


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("true", "1", "yes", "on")


class Context:
    """Holds the global SDK state.

    Attributes:
        testing (bool): Whether the process is running under test. Gated
            test-only operations are no-ops while this is False. Seeded from
            the PYGLEAN_TESTING environment variable at import time.
    """

    testing: bool = _env_flag("PYGLEAN_TESTING")
