"""Pytest configuration and fixtures for testing"""

import os

# Set environment variables BEFORE importing main
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("SENTRY_DSN", None)

import io
from typing import Dict, List, Tuple

import numpy as np
import pytest
from PIL import Image
from fastapi.testclient import TestClient

from main import app
from core.dependencies import get_face_detection_service, get_skin_analysis_service
from models.landmark_detector import DetectedFace, FaceBox
from models.landmark_scheme import NUM_LANDMARKS
from services.face_detection_service import FaceDetectionService
from services.skin_analysis_service import SkinAnalysisService


# ========== Fake Detector ==========
def make_face(points: Dict[int, Tuple[float, float]] = None, default=(10.0, 10.0)) -> DetectedFace:
    """DetectedFace with 68 landmarks at `default`, overridden by `points`"""
    landmarks = [default] * NUM_LANDMARKS
    for idx, point in (points or {}).items():
        landmarks[idx] = point
    return DetectedFace(box=FaceBox(x=0, y=0, width=100, height=120), landmarks=list(landmarks))


class FakeDetector:
    """Stands in for MediaPipeLandmarkDetector; returns preset faces"""

    def __init__(self, faces: List[DetectedFace] = None):
        self.faces = faces if faces is not None else [make_face()]
        self.calls = []

    def detect(self, rgb_image):
        self.calls.append(rgb_image)
        return list(self.faces)

    def close(self):
        pass


@pytest.fixture
def fake_detector():
    return FakeDetector()


@pytest.fixture
def face_detection_service(fake_detector):
    return FaceDetectionService(fake_detector)


@pytest.fixture
def analysis_service(face_detection_service):
    return SkinAnalysisService(face_detection_service)


# ========== Frames & Images ==========
def solid_rgba(rgb: Tuple[int, int, int], width: int = 64, height: int = 48) -> np.ndarray:
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    frame[..., 0], frame[..., 1], frame[..., 2] = rgb
    frame[..., 3] = 255
    return frame


def png_bytes(rgb: Tuple[int, int, int] = (200, 150, 130), size=(64, 48)) -> bytes:
    """Lossless image so decoded pixels match exactly"""
    img = Image.new('RGB', size, color=rgb)
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


@pytest.fixture
def sample_image_bytes():
    return png_bytes()


@pytest.fixture
def sample_image_file(sample_image_bytes):
    return {"file": ("frame.png", io.BytesIO(sample_image_bytes), "image/png")}


# ========== Test Client Setup ==========
@pytest.fixture
def client():
    """Test client without detector overrides"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_with_detector(fake_detector):
    """Test client whose services run on the fake detector"""
    face_service = FaceDetectionService(fake_detector)
    analysis = SkinAnalysisService(face_service)

    app.dependency_overrides[get_face_detection_service] = lambda: face_service
    app.dependency_overrides[get_skin_analysis_service] = lambda: analysis
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


# ========== Factories ==========
@pytest.fixture
def face_factory():
    return make_face


@pytest.fixture
def rgba_factory():
    return solid_rgba


@pytest.fixture
def png_factory():
    return png_bytes
