"""Asset readiness: confirm every referenced media file has loaded.

Probes run concurrently as asyncio tasks and resolve in any order. A
probe that fails or never finishes simply never counts, so readiness is
never signalled for that cycle; there is deliberately no timeout.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from io import BytesIO
from typing import Protocol

import aiohttp
from PIL import Image

from pycreative.exceptions import CreativeStateError
from pycreative.models.assets import AssetDescriptor, AssetType

_logger = logging.getLogger(__name__)

#: Bytes requested from a video before it counts as having data.
_VIDEO_FIRST_CHUNK = 64 * 1024


class AssetProbe(Protocol):
    """Structural interface of a load check for one asset."""

    async def probe(self, asset: AssetDescriptor) -> bool:
        ...


def _decode_image(body: bytes) -> None:
    with Image.open(BytesIO(body)) as im:
        im.verify()


class HttpAssetProbe:
    """Load assets over HTTP with a shared ``aiohttp.ClientSession``.

    * image: the full body is downloaded and decoded with Pillow.
    * video: the first non-empty chunk of the body is available.
    """

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def probe(self, asset: AssetDescriptor) -> bool:
        checks = {
            AssetType.IMAGE: self._check_image,
            AssetType.VIDEO: self._check_video,
        }
        try:
            return await checks[asset.type](asset.file)
        except (aiohttp.ClientError, OSError, ValueError, SyntaxError):
            _logger.debug("Asset probe failed for %s", asset.file, exc_info=True)
            return False

    async def _check_image(self, url: str) -> bool:
        async with self._http.get(url) as resp:
            if resp.status >= 300:
                _logger.debug("Image %s answered HTTP %s", url, resp.status)
                return False
            body = await resp.read()
        if not body:
            return False
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _decode_image, body)
        return True

    async def _check_video(self, url: str) -> bool:
        async with self._http.get(url) as resp:
            if resp.status >= 300:
                _logger.debug("Video %s answered HTTP %s", url, resp.status)
                return False
            chunk = await resp.content.read(_VIDEO_FIRST_CHUNK)
        return bool(chunk)


class AssetReadinessVerifier:
    """Count confirmed assets and fire *on_loaded* once all have loaded.

    Every :meth:`reset` starts a new generation; probes still in flight
    from an older generation are ignored when they resolve.
    """

    def __init__(self, on_loaded: Callable[[], None], probe: AssetProbe | None = None) -> None:
        self._on_loaded = on_loaded
        self._probe = probe
        self._generation = 0
        self._total = 0
        self._loaded = 0
        self._fired = False
        self._tasks: set[asyncio.Task[None]] = set()
        self._errors: list[BaseException] = []

    @property
    def probe(self) -> AssetProbe | None:
        return self._probe

    @probe.setter
    def probe(self, probe: AssetProbe | None) -> None:
        self._probe = probe

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def loaded_count(self) -> int:
        return self._loaded

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def reset(self) -> None:
        self._generation += 1
        self._total = 0
        self._loaded = 0
        self._fired = False

    def check(self, assets: Sequence[AssetDescriptor]) -> None:
        """Start probing *assets*; an empty list is ready immediately."""
        self._total = len(assets)
        if not assets:
            self._fire_if_loaded()
            return

        probe = self._probe
        if probe is None:
            raise CreativeStateError("No asset probe available. Use 'async with creative:' or pass probe=")

        loop = asyncio.get_running_loop()
        for asset in assets:
            task = loop.create_task(self._run_probe(probe, asset, self._generation))
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    async def wait(self) -> None:
        """Wait for every in-flight probe to settle.

        Re-raises the first error raised by *on_loaded* inside a probe task.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        self.raise_errors()

    def raise_errors(self) -> None:
        """Raise (and forget) the first error collected from a probe task."""
        if not self._errors:
            return
        error = self._errors[0]
        self._errors.clear()
        raise error

    def _task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._errors.append(error)

    async def cancel(self) -> None:
        """Cancel in-flight probes (used on shutdown, not on reset)."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _run_probe(self, probe: AssetProbe, asset: AssetDescriptor, generation: int) -> None:
        try:
            loaded = await probe.probe(asset)
        except asyncio.CancelledError:
            raise
        except Exception:
            _logger.debug("Asset probe raised for %s", asset.file, exc_info=True)
            return
        if not loaded:
            return
        if generation != self._generation:
            _logger.debug("Dropping stale load of %s (generation %s)", asset.file, generation)
            return
        self._loaded += 1
        self._fire_if_loaded()

    def _fire_if_loaded(self) -> None:
        if self._fired or self._loaded < self._total:
            return
        self._fired = True
        self._on_loaded()
