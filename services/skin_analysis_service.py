"""Skin analysis: first detected face -> three region samples -> skin type"""

import time
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

import numpy as np

from core.exceptions import NoFaceDetectedException
from core.logging import logger, log_structured
from models.landmark_scheme import NUM_LANDMARKS, REGION_LANDMARKS
from models.skin_classifier import SkinType, classify_metrics, get_recommendations
from models.skin_metrics import PixelSample, SkinMetrics, sample_pixel, OUT_OF_BOUNDS_CLAMP
from services.face_detection_service import FaceDetectionService, decode_image

REGIONS = ("forehead", "cheek", "chin")


@dataclass
class SkinAnalysisResult:
    """Result of analysing one captured still"""
    skin_type: SkinType
    metrics: SkinMetrics
    regions: Dict[str, PixelSample]
    recommendations: List[str] = field(default_factory=list)
    face_count: int = 1

    def to_dict(self) -> dict:
        """dict로 변환 (API 응답용)"""
        return {
            "skin_type": self.skin_type.value,
            "metrics": self.metrics.to_dict(),
            "metrics_percent": self.metrics.to_percent(),
            "regions": {name: sample.to_dict() for name, sample in self.regions.items()},
            "recommendations": list(self.recommendations),
            "face_count": self.face_count
        }


class SkinAnalysisService:
    """
    Runs skin analysis on a captured frame

    Only the first face in detector output order is analysed. Pixel samples
    are taken at the forehead, cheek and chin landmarks and averaged.
    """

    def __init__(
        self,
        face_detection_service: FaceDetectionService,
        region_landmarks: Optional[Dict[str, int]] = None,
        out_of_bounds: str = OUT_OF_BOUNDS_CLAMP
    ):
        region_landmarks = dict(region_landmarks or REGION_LANDMARKS)
        if set(region_landmarks) != set(REGIONS):
            raise ValueError(f"Region landmarks must define exactly {REGIONS}, got {sorted(region_landmarks)}")
        for region, index in region_landmarks.items():
            if not 0 <= index < NUM_LANDMARKS:
                raise ValueError(f"{region} landmark index {index} outside 0..{NUM_LANDMARKS - 1}")

        self.face_detection_service = face_detection_service
        self.region_landmarks = region_landmarks
        self.out_of_bounds = out_of_bounds

    def analyze_frame(self, rgba: np.ndarray) -> SkinAnalysisResult:
        """
        Analyse an RGBA still

        Raises:
            NoFaceDetectedException: detector found no face
            LandmarkOutOfBoundsException: sample point off-frame under the "error" policy
        """
        faces = self.face_detection_service.detect_faces(rgba)
        if not faces:
            raise NoFaceDetectedException()

        face = faces[0]
        if len(faces) > 1:
            logger.info(f"{len(faces)} faces detected, analysing the first one")

        regions = {}
        for region in REGIONS:
            x, y = face.point(self.region_landmarks[region])
            regions[region] = sample_pixel(rgba, x, y, out_of_bounds=self.out_of_bounds)

        metrics = SkinMetrics.average(regions["forehead"], regions["cheek"], regions["chin"])
        skin_type = classify_metrics(metrics)

        return SkinAnalysisResult(
            skin_type=skin_type,
            metrics=metrics,
            regions=regions,
            recommendations=get_recommendations(skin_type),
            face_count=len(faces)
        )

    def analyze(self, image_data: bytes) -> SkinAnalysisResult:
        """Decode uploaded bytes and analyse them"""
        start = time.time()
        rgba = decode_image(image_data)
        result = self.analyze_frame(rgba)

        log_structured("skin_analysis", {
            "skin_type": result.skin_type.value,
            "metrics": result.metrics.to_percent(),
            "face_count": result.face_count,
            "analysis_ms": round((time.time() - start) * 1000, 2)
        })
        return result
