"""FastAPI dependencies and Pydantic models"""

from typing import Dict, List
from pydantic import BaseModel, Field

from models.skin_classifier import SkinType


# ========== Detection ==========
class FaceBoxModel(BaseModel):
    """Face bounding box in pixels"""
    x: float
    y: float
    width: float
    height: float


class DetectedFaceModel(BaseModel):
    """One detected face"""
    box: FaceBoxModel
    landmarks: List[List[float]] = Field(..., description="68 [x, y] points in pixels")


class ImageSize(BaseModel):
    width: int
    height: int


class DetectResponse(BaseModel):
    """Live-preview detection response"""
    success: bool = True
    face_count: int
    faces: List[DetectedFaceModel]
    image: ImageSize


# ========== Analysis ==========
class RegionSample(BaseModel):
    brightness: float
    redness: float
    oiliness: float


class SkinAnalysisData(BaseModel):
    """Skin analysis payload"""
    skin_type: SkinType
    metrics: RegionSample = Field(..., description="Mean of the three region samples")
    metrics_percent: Dict[str, int] = Field(..., description="Metrics x100, rounded")
    regions: Dict[str, RegionSample]
    recommendations: List[str]
    face_count: int


class AnalyzeResponse(BaseModel):
    """Skin analysis response"""
    success: bool = True
    data: SkinAnalysisData
    processing_time: float


class ErrorResponse(BaseModel):
    """Error response body"""
    success: bool = False
    error: str
    message: str
