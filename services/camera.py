"""OpenCV camera source producing RGBA frames"""

import logging
from typing import Optional

import cv2
import numpy as np

from core.exceptions import CameraAccessDeniedException

logger = logging.getLogger(__name__)


class CameraSource:
    """
    Webcam wrapper

    Usage:
        with CameraSource(index=0, width=640, height=480) as camera:
            frame = camera.read()
    """

    def __init__(self, index: int = 0, width: int = 640, height: int = 480):
        self.index = index
        self.width = width
        self.height = height
        self._capture = None
        self._last_frame: Optional[np.ndarray] = None

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        """Most recent frame returned by read()"""
        return self._last_frame

    def open(self) -> "CameraSource":
        capture = cv2.VideoCapture(self.index)
        if not capture.isOpened():
            capture.release()
            raise CameraAccessDeniedException()

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._capture = capture
        logger.info(f"Camera {self.index} opened ({self.width}x{self.height})")
        return self

    def read(self) -> Optional[np.ndarray]:
        """Grab one frame as (height, width, 4) RGBA, or None if unavailable"""
        if self._capture is None:
            return None

        ok, frame = self._capture.read()
        if not ok or frame is None:
            return None

        self._last_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA)
        return self._last_frame

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info(f"Camera {self.index} released")

    def __enter__(self) -> "CameraSource":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
