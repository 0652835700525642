"""Services module for SkinScan Backend"""

from services.face_detection_service import FaceDetectionService
from services.skin_analysis_service import SkinAnalysisService, SkinAnalysisResult
from services.detection_loop import DetectionLoop
from services.capture_session import CaptureSession

__all__ = [
    "FaceDetectionService",
    "SkinAnalysisService",
    "SkinAnalysisResult",
    "DetectionLoop",
    "CaptureSession",
]
