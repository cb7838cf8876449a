"""Runtime configuration for Shift applications."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

TRUTHY = ("1", "true", "yes", "on")


@dataclass
class ShiftConfig:
    """Application configuration.

    Values come from ``SHIFT_*`` environment variables layered over an
    optional ``config/shift.env`` file under the base directory.
    """

    log_level: str = "INFO"
    json_logs: bool = False
    log_file: Path | None = None
    bus_namespace: str = "event-bus"

    @classmethod
    def from_env(
        cls,
        base_dir: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> ShiftConfig:
        """Load configuration from the env file and environment variables.

        Args:
            base_dir: Directory holding ``config/shift.env`` (cwd if omitted)
            environ: Environment mapping (``os.environ`` if omitted)

        Returns:
            ShiftConfig instance
        """
        if base_dir is None:
            base_dir = Path.cwd()
        if environ is None:
            environ = dict(os.environ)

        values = cls._load_env_file(base_dir / "config" / "shift.env")
        values.update({k: v for k, v in environ.items() if k.startswith("SHIFT_")})

        log_file = values.get("SHIFT_LOG_FILE")
        return cls(
            log_level=values.get("SHIFT_LOG_LEVEL", "INFO").upper(),
            json_logs=values.get("SHIFT_LOG_JSON", "").lower() in TRUTHY,
            log_file=Path(log_file) if log_file else None,
            bus_namespace=values.get("SHIFT_BUS_NAMESPACE", "event-bus"),
        )

    @staticmethod
    def _load_env_file(path: Path) -> dict[str, str]:
        """Parse a ``KEY=value`` env file."""
        if not path.exists():
            return {}

        values: dict[str, str] = {}
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[7:]
            if "=" in line:
                key, value = line.split("=", 1)
                values[key.strip()] = value.strip().strip('"').strip("'")

        return values
