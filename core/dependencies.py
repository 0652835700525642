"""Dependency injection providers for FastAPI"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from models.landmark_detector import MediaPipeLandmarkDetector
    from services.face_detection_service import FaceDetectionService
    from services.skin_analysis_service import SkinAnalysisService

from config.settings import settings
from core.logging import logger


# ========== Global Service Instances (Lazy) ==========
_landmark_detector: Optional['MediaPipeLandmarkDetector'] = None
_face_detection_service: Optional['FaceDetectionService'] = None
_skin_analysis_service: Optional['SkinAnalysisService'] = None


def detector_loaded() -> bool:
    return _landmark_detector is not None


# ========== Dependency Providers (for FastAPI Depends) ==========
def get_landmark_detector() -> 'MediaPipeLandmarkDetector':
    """
    Get MediaPipeLandmarkDetector instance (Lazy Initialization)

    The face mesh model is loaded on first use.
    """
    global _landmark_detector
    if _landmark_detector is None:
        logger.info("Lazy initializing MediaPipeLandmarkDetector...")
        from models.landmark_detector import MediaPipeLandmarkDetector
        _landmark_detector = MediaPipeLandmarkDetector(
            max_num_faces=settings.MAX_NUM_FACES,
            min_detection_confidence=settings.MIN_DETECTION_CONFIDENCE
        )
    return _landmark_detector


def get_face_detection_service() -> 'FaceDetectionService':
    """Get FaceDetectionService instance (Lazy Initialization)"""
    global _face_detection_service
    if _face_detection_service is None:
        from services.face_detection_service import FaceDetectionService
        _face_detection_service = FaceDetectionService(get_landmark_detector())
    return _face_detection_service


def get_skin_analysis_service() -> 'SkinAnalysisService':
    """Get SkinAnalysisService instance (Lazy Initialization)"""
    global _skin_analysis_service
    if _skin_analysis_service is None:
        from services.skin_analysis_service import SkinAnalysisService
        _skin_analysis_service = SkinAnalysisService(
            get_face_detection_service(),
            region_landmarks=settings.region_landmarks,
            out_of_bounds=settings.SAMPLE_OUT_OF_BOUNDS
        )
    return _skin_analysis_service


def shutdown_services() -> None:
    """Release the detector and drop cached services"""
    global _landmark_detector, _face_detection_service, _skin_analysis_service

    if _landmark_detector is not None:
        _landmark_detector.close()
        logger.info("MediaPipeLandmarkDetector closed")

    _landmark_detector = None
    _face_detection_service = None
    _skin_analysis_service = None
