# models/__init__.py
"""
SkinScan - 얼굴 랜드마크 및 피부 분석 모듈

MediaPipe 랜드마크 검출, 픽셀 샘플링, 피부 타입 분류를 제공합니다.
"""

from .landmark_detector import MediaPipeLandmarkDetector, DetectedFace, FaceBox
from .skin_metrics import PixelSample, SkinMetrics, sample_pixel, sample_index
from .skin_classifier import SkinType, classify_skin_type, get_recommendations

__all__ = [
    "MediaPipeLandmarkDetector",
    "DetectedFace",
    "FaceBox",
    "PixelSample",
    "SkinMetrics",
    "sample_pixel",
    "sample_index",
    "SkinType",
    "classify_skin_type",
    "get_recommendations",
]
