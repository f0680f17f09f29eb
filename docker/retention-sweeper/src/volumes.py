from __future__ import annotations

import logging
import os
from typing import Any, Callable


LOGGER = logging.getLogger("retention_sweeper")

VOLUME_PREFIX = "volume:"

RootResolver = Callable[[str], "str | None"]


def parse_volume_root(root: str) -> tuple[str, str] | None:
    """Split ``volume:<name>[/<path>]`` into (name, relative path); None for plain paths."""
    if not root.startswith(VOLUME_PREFIX):
        return None
    remainder = root[len(VOLUME_PREFIX):].strip("/")
    volume_name, _, relative_path = remainder.partition("/")
    if not volume_name:
        raise ValueError(f"Volume root '{root}' has no volume name")
    return volume_name, relative_path


class VolumeRootResolver:
    def __init__(self, docker_client: Any | None = None):
        self._docker_client = docker_client
        self._client_loaded = docker_client is not None

    def __call__(self, root: str) -> str | None:
        parsed = parse_volume_root(root)
        if parsed is None:
            return root

        volume_name, relative_path = parsed
        client = self._get_client()
        if client is None:
            return None

        try:
            volume = client.volumes.get(volume_name)
            mountpoint = str(volume.attrs.get("Mountpoint") or "")
        except Exception:
            LOGGER.warning("[SWEEP]: Docker volume '%s' could not be resolved", volume_name, exc_info=True)
            return None

        if not mountpoint:
            return None
        if not relative_path:
            return mountpoint
        return os.path.join(mountpoint, relative_path)

    def _get_client(self) -> Any | None:
        if not self._client_loaded:
            self._client_loaded = True
            try:
                import docker

                self._docker_client = docker.from_env()
            except Exception:
                LOGGER.warning("[SWEEP]: Docker client unavailable, volume roots will be skipped", exc_info=True)
                self._docker_client = None
        return self._docker_client
