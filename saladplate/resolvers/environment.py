"""
Environment variable lookup for ${{ NAME }} markers.

- Values come from the process environment, overlaid by Options.environment
- Unset and empty variables both resolve to an empty string
- The process environment is never modified
"""

import os
from typing import Dict, Mapping, Optional


class EnvironmentResolver:
    """
    Resolves variable names and composes child process environments.

    The overlay wins over the process environment when names collide.
    """

    def __init__(
        self,
        overlay: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None
    ):
        """
        Initialize resolver.

        Args:
            overlay: Extra variables that take precedence over ``base``
            base: Environment to read from (default: os.environ, read at lookup time)
        """
        self.overlay: Dict[str, str] = dict(overlay or {})
        self._base = base

    @property
    def base(self) -> Mapping[str, str]:
        return os.environ if self._base is None else self._base

    def lookup(self, name: str) -> Optional[str]:
        """Exact-name lookup; None when absent."""
        if name in self.overlay:
            return self.overlay[name]
        return self.base.get(name)

    def resolve(self, name: str) -> str:
        """Value to substitute for ``name``; missing variables are not an error."""
        return self.lookup(name) or ""

    def child_env(self) -> Dict[str, str]:
        """Environment for spawned commands."""
        env = dict(self.base)
        env.update(self.overlay)
        return env
