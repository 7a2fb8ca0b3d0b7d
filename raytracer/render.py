"""
Tiled, multi-threaded rendering of a scene into an 8-bit pixel buffer.

The scene, its textures and the camera are only read while a pass runs, so
tile workers share them without locking. Each worker shades its tile into a
private array and copies it into the pass buffer in one assignment, which
means a pixel's channels are never written separately and a cancelled pass
leaves only whole tiles behind.
"""
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait as wait_futures
from typing import List, Optional, Tuple

import numpy as np

from raytracer import config
from raytracer.color import to_rgb8

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]  # x0, y0, x1, y1 (exclusive)


class RenderSettings:
    def __init__(
        self,
        width: int = config.RENDER_WIDTH,
        height: int = config.RENDER_HEIGHT,
        samples_per_axis: int = config.RENDER_SAMPLES_PER_AXIS,
        max_depth: int = config.RENDER_MAX_DEPTH,
        tile_size: int = config.RENDER_TILE_SIZE,
        workers: int = config.RENDER_WORKERS,
    ):
        for name, value in (
            ("width", width),
            ("height", height),
            ("samples_per_axis", samples_per_axis),
            ("tile_size", tile_size),
            ("workers", workers),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")

        self.width = width
        self.height = height
        self.samples_per_axis = samples_per_axis
        self.max_depth = max_depth
        self.tile_size = tile_size
        self.workers = workers

    def tiles(self) -> List[Tile]:
        size = self.tile_size
        return [
            (x0, y0, min(x0 + size, self.width), min(y0 + size, self.height))
            for y0 in range(0, self.height, size)
            for x0 in range(0, self.width, size)
        ]


class CancellationToken:
    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class RenderPass:
    """One run over every tile of the image, with its own buffer and token."""

    def __init__(self, settings: RenderSettings):
        self.settings = settings
        self.token = CancellationToken()
        self.buffer = np.zeros((settings.height, settings.width, 3), dtype=np.uint8)
        self.futures = []
        self._completed: List[Tile] = []
        self._lock = threading.Lock()
        self._started = time.perf_counter()

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    @property
    def done(self) -> bool:
        return all(f.done() for f in self.futures)

    @property
    def completed_tiles(self) -> List[Tile]:
        with self._lock:
            return list(self._completed)

    def cancel(self):
        with self._lock:
            self.token.cancel()

    def commit(self, tile: Tile, pixels: np.ndarray) -> bool:
        # The check and the copy happen under the lock so cancel() can't land in between
        x0, y0, x1, y1 = tile
        with self._lock:
            if self.token.cancelled:
                return False
            self.buffer[y0:y1, x0:x1] = pixels
            self._completed.append(tile)
        return True

    def wait(self, timeout: Optional[float] = None) -> np.ndarray:
        """Block until every tile has finished or been abandoned; worker errors are re-raised."""
        wait_futures(self.futures, timeout=timeout)
        for future in self.futures:
            if future.done():
                future.result()
        return self.buffer

    def elapsed(self) -> float:
        return time.perf_counter() - self._started


class Renderer:
    """Renders a scene through a camera, one pass at a time.

    Starting a pass cancels the previous one; only the latest pass is
    published.
    """

    def __init__(self, scene, camera, settings: Optional[RenderSettings] = None, executor: Optional[ThreadPoolExecutor] = None):
        self.scene = scene
        self.camera = camera
        self.settings = settings if settings else RenderSettings()
        self._executor = executor if executor is not None else ThreadPoolExecutor(max_workers=self.settings.workers)
        self._owns_executor = executor is None
        self._current: Optional[RenderPass] = None

    @property
    def current(self) -> Optional[RenderPass]:
        return self._current

    def start(self) -> RenderPass:
        self.cancel()
        render_pass = RenderPass(self.settings)
        self._current = render_pass
        tiles = self.settings.tiles()
        logger.info(
            "Starting %dx%d render pass: %d tiles, %d samples per pixel, depth %d",
            self.settings.width,
            self.settings.height,
            len(tiles),
            self.settings.samples_per_axis ** 2,
            self.settings.max_depth,
        )
        for tile in tiles:
            future = self._executor.submit(self._render_tile, render_pass, tile)
            future.add_done_callback(self._log_failure)
            render_pass.futures.append(future)
        return render_pass

    def render(self) -> np.ndarray:
        render_pass = self.start()
        buffer = render_pass.wait()
        if render_pass.cancelled:
            logger.info("Render pass cancelled after %.2fs", render_pass.elapsed())
        else:
            logger.info("Render pass finished in %.2fs", render_pass.elapsed())
        return buffer

    def cancel(self):
        # A finished pass stays authoritative
        if self._current is not None and not self._current.cancelled and not self._current.done:
            self._current.cancel()
            logger.info("Cancelled render pass with %d tiles committed", len(self._current.completed_tiles))

    def publish(self) -> Tuple[Optional[np.ndarray], List[Tile]]:
        """Buffer of the latest pass and the tiles it has committed so far."""
        if self._current is None:
            return None, []
        return self._current.buffer, self._current.completed_tiles

    def close(self):
        self.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _render_tile(self, render_pass: RenderPass, tile: Tile) -> bool:
        token = render_pass.token
        if token.cancelled:
            return False

        settings = render_pass.settings
        x0, y0, x1, y1 = tile
        pixels = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.uint8)
        for row in range(y0, y1):
            if token.cancelled:
                return False
            for col in range(x0, x1):
                color = self.scene.pixel_color(
                    self.camera,
                    col,
                    row,
                    settings.width,
                    settings.height,
                    settings.samples_per_axis,
                    settings.max_depth,
                )
                pixels[row - y0, col - x0] = to_rgb8(color)

        return render_pass.commit(tile, pixels)

    @staticmethod
    def _log_failure(future):
        if not future.cancelled() and future.exception() is not None:
            logger.error("Tile worker failed: %s", future.exception())


__all__ = ["RenderSettings", "CancellationToken", "RenderPass", "Renderer"]
