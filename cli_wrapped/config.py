"""Environment-derived configuration for CLI Wrapped.

The loader never reads os.environ or sys.platform directly. Everything it
needs from the host is captured once in a LoaderConfig, which tests can
build by hand.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .constants import DEFAULT_XDG_DATA_DIR


@dataclass(frozen=True)
class LoaderConfig:
    """Host facts used to locate history files.

    Attributes:
        home: The user's home directory
        shell_env: Value of $SHELL (may be empty)
        platform: sys.platform style identifier (e.g. "darwin", "linux")
        xdg_data_home: Value of $XDG_DATA_HOME, if set
    """

    home: Path
    shell_env: str = ""
    platform: str = "linux"
    xdg_data_home: Optional[Path] = None

    @property
    def data_dir(self) -> Path:
        """XDG data directory, falling back to ~/.local/share."""
        return self.xdg_data_home or self.home / DEFAULT_XDG_DATA_DIR

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "LoaderConfig":
        """Capture the current process environment.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            LoaderConfig for this host
        """
        env = os.environ if environ is None else environ
        xdg = env.get("XDG_DATA_HOME")
        return cls(
            home=Path.home(),
            shell_env=env.get("SHELL", ""),
            platform=sys.platform,
            xdg_data_home=Path(xdg) if xdg else None,
        )
