"""Periodic live-preview face detection with single-flight guarding"""

import asyncio
import logging
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

FrameSource = Callable[[], Optional[Any]]
Detector = Callable[[Any], List[Any]]
ResultHandler = Callable[[List[Any]], None]


class DetectionLoop:
    """
    Runs detection on the latest live frame every ``interval`` seconds

    At most one detection is in flight at a time: a tick that fires while the
    previous detection is still running is dropped. Detector calls run in a
    worker thread.

    Usage:
        loop = DetectionLoop(camera.read, service.detect_faces, session.on_faces)
        await loop.start()
        ...
        await loop.stop()
    """

    def __init__(
        self,
        frame_source: FrameSource,
        detect: Detector,
        on_result: ResultHandler,
        interval: float = 0.1
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")

        self.frame_source = frame_source
        self.detect = detect
        self.on_result = on_result
        self.interval = interval

        self._task: Optional[asyncio.Task] = None
        self._in_flight: Optional[asyncio.Task] = None

        self.ticks = 0
        self.skipped_ticks = 0
        self.failed_ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def busy(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    async def start(self) -> None:
        """Start the loop (no-op if already running)"""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="detection-loop")
        logger.info(f"Detection loop started (interval={self.interval * 1000:.0f}ms)")

    async def stop(self) -> None:
        """Cancel the loop and any in-flight detection"""
        tasks = [t for t in (self._task, self._in_flight) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._in_flight = None
        logger.info(
            f"Detection loop stopped (ticks={self.ticks}, skipped={self.skipped_ticks}, "
            f"failed={self.failed_ticks})"
        )

    async def _run(self) -> None:
        while True:
            if self.busy:
                self.skipped_ticks += 1
                logger.debug("Previous detection still running, tick skipped")
            else:
                self.ticks += 1
                self._in_flight = asyncio.create_task(self._tick())
            await asyncio.sleep(self.interval)

    async def _tick(self) -> None:
        try:
            frame = self.frame_source()
            if frame is None:
                return
            faces = await asyncio.to_thread(self.detect, frame)
            self.on_result(faces)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.failed_ticks += 1
            logger.warning(f"Live detection failed: {e}")
