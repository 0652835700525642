"""Capture / analyze state for one camera session"""

import asyncio
import logging
import threading
from typing import Any, List, Optional

import numpy as np

from core.exceptions import NoFaceDetectedException, SkinScanException
from services.skin_analysis_service import SkinAnalysisService, SkinAnalysisResult

logger = logging.getLogger(__name__)


class CaptureSession:
    """
    Holds the state the UI controls read and write

    - capture is enabled while the live loop sees at least one face
    - capture() copies the current frame into the still buffer and enables analyze
    - analyze() runs detection again on the still; failures leave the still in
      place so the user can retry
    """

    def __init__(self, analysis_service: SkinAnalysisService):
        self.analysis_service = analysis_service

        self._capture_enabled = False
        self._live_faces: List[Any] = []
        self._still: Optional[np.ndarray] = None
        self._analyzing = False
        self._state_lock = threading.Lock()
        self._last_result: Optional[SkinAnalysisResult] = None

    # ========== Read ==========
    @property
    def capture_enabled(self) -> bool:
        return self._capture_enabled

    @property
    def analyze_enabled(self) -> bool:
        return self._still is not None and not self._analyzing

    @property
    def is_analyzing(self) -> bool:
        return self._analyzing

    @property
    def live_faces(self) -> List[Any]:
        return list(self._live_faces)

    @property
    def still_frame(self) -> Optional[np.ndarray]:
        return self._still

    @property
    def last_result(self) -> Optional[SkinAnalysisResult]:
        return self._last_result

    # ========== Write ==========
    def update_faces(self, faces: List[Any]) -> None:
        """Live-loop callback: enable capture iff at least one face is visible"""
        self._live_faces = list(faces)
        self._capture_enabled = len(faces) > 0

    def capture(self, frame: np.ndarray) -> np.ndarray:
        """Copy the current live frame into the still buffer"""
        if not self._capture_enabled:
            raise NoFaceDetectedException("Capture is disabled until a face is in view")
        if frame is None:
            raise SkinScanException("No camera frame available to capture")

        self._still = np.array(frame, copy=True)
        self._last_result = None
        logger.info(f"Still captured ({self._still.shape[1]}x{self._still.shape[0]})")
        return self._still

    def analyze(self) -> SkinAnalysisResult:
        """Analyse the captured still"""
        with self._state_lock:
            if self._still is None:
                raise SkinScanException("Capture an image before analyzing")
            if self._analyzing:
                raise SkinScanException("Analysis already in progress")
            self._analyzing = True
            self._last_result = None

        try:
            result = self.analysis_service.analyze_frame(self._still)
        finally:
            self._analyzing = False

        self._last_result = result
        return result

    async def analyze_async(self) -> SkinAnalysisResult:
        """analyze() in a worker thread so the live loop keeps ticking"""
        return await asyncio.to_thread(self.analyze)

    def reset(self) -> None:
        """Drop the still and any result"""
        self._still = None
        self._last_result = None
        self._analyzing = False
