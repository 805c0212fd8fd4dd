"""Per-device identity used as the account key by the backend."""

from __future__ import annotations

import base64
import logging
import platform
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable


logger = logging.getLogger(__name__)

_MACHINE_ID_PATHS = (Path("/etc/machine-id"), Path("/var/lib/dbus/machine-id"))
# uuid.getnode() sets the multicast bit when it had to invent a random node.
_RANDOM_NODE_BIT = 1 << 40


@dataclass
class HostDeviceInfo:
    """Reads identifiers from the host operating system."""

    machine_id_paths: tuple[Path, ...] = _MACHINE_ID_PATHS
    node: Callable[[], int] = field(default=uuid.getnode)

    def installation_id(self) -> str:
        for path in self.machine_id_paths:
            try:
                value = path.read_text(encoding="utf-8").strip()
            except OSError:
                continue
            if value:
                return value
        node = self.node()
        if node & _RANDOM_NODE_BIT:
            raise LookupError("no machine id or hardware address available")
        return f"{node:012x}"

    def model(self) -> str:
        return platform.machine() or "unknown"

    def manufacturer(self) -> str:
        return platform.system() or "unknown"

    def brand(self) -> str:
        try:
            distro = platform.freedesktop_os_release().get("ID", "")
        except OSError:
            distro = ""
        return distro or platform.system().lower() or "unknown"


def encode_fingerprint(installation_id: str, model: str, manufacturer: str, brand: str) -> str:
    raw = f"{installation_id}_{model}_{manufacturer}_{brand}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class DeviceIdentity:
    """Derives the device fingerprint once and memoizes it.

    When the platform lookups fail the identity degrades to
    ``"android_<unix millis>"``. That fallback differs on every process start,
    so the backend will treat the device as new after a restart.
    """

    def __init__(
        self,
        source: HostDeviceInfo | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._source = source or HostDeviceInfo()
        self._clock = clock
        self._fingerprint: str | None = None
        self._stable = True

    @property
    def stable(self) -> bool:
        self.get_fingerprint()
        return self._stable

    def get_fingerprint(self) -> str:
        if self._fingerprint is None:
            self._fingerprint = self._derive()
        return self._fingerprint

    def _derive(self) -> str:
        try:
            fingerprint = encode_fingerprint(
                self._source.installation_id(),
                self._source.model(),
                self._source.manufacturer(),
                self._source.brand(),
            )
        except Exception as exc:
            logger.error("Error generating device fingerprint: %s", exc)
            self._stable = False
            return f"android_{int(self._clock() * 1000)}"
        logger.debug("Generated device fingerprint: %s...", fingerprint[:8])
        return fingerprint


__all__ = ["DeviceIdentity", "HostDeviceInfo", "encode_fingerprint"]
