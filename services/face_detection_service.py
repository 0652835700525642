"""Face detection service: image decoding + MediaPipe landmark detection"""

import time
from typing import Dict, Any, List, Optional

import cv2
import numpy as np

from core.exceptions import ImageDecodeException, InvalidFileFormatException
from core.logging import logger, log_structured
from models.landmark_detector import MediaPipeLandmarkDetector, DetectedFace

ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "webp"}


def validate_filename(filename: Optional[str]) -> None:
    """Reject uploads whose extension is not a supported image type"""
    if not filename or "." not in filename:
        raise InvalidFileFormatException()
    if filename.lower().rsplit(".", 1)[-1] not in ALLOWED_EXTENSIONS:
        raise InvalidFileFormatException()


def decode_image(image_data: bytes) -> np.ndarray:
    """
    Decode image bytes into an RGBA frame

    Returns:
        (height, width, 4) uint8 array
    """
    if not image_data:
        raise ImageDecodeException("Empty image payload")

    nparr = np.frombuffer(image_data, np.uint8)
    img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    if img is None:
        raise ImageDecodeException()

    return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)


class FaceDetectionService:
    """
    Service wrapping the landmark detector

    Accepts RGBA frames (what the rest of the pipeline samples from) and hands
    the detector the RGB channels it expects.
    """

    def __init__(self, detector: MediaPipeLandmarkDetector):
        """
        Initialize face detection service

        Args:
            detector: landmark detector exposing detect(rgb) -> List[DetectedFace]
        """
        self.detector = detector

    def detect_faces(self, rgba: np.ndarray) -> List[DetectedFace]:
        """Detect all faces in an RGBA frame, in detector output order"""
        rgb = np.ascontiguousarray(rgba[..., :3])
        return self.detector.detect(rgb)

    def detect_face(self, image_data: bytes) -> Dict[str, Any]:
        """
        Decode and run detection on one uploaded frame

        Returns:
            {
                "has_face": bool,
                "face_count": int,
                "faces": List[DetectedFace],
                "image": {"width": int, "height": int}
            }
        """
        rgba = decode_image(image_data)
        height, width = rgba.shape[:2]

        start = time.time()
        faces = self.detect_faces(rgba)
        detection_ms = round((time.time() - start) * 1000, 2)

        log_structured("face_detection", {
            "method": "mediapipe",
            "face_count": len(faces),
            "success": bool(faces),
            "detection_ms": detection_ms
        })
        if not faces:
            logger.debug("Live frame has no face")

        return {
            "has_face": bool(faces),
            "face_count": len(faces),
            "faces": faces,
            "image": {"width": width, "height": height}
        }
