# models/landmark_detector.py
"""
MediaPipe Face Mesh 기반 얼굴 랜드마크 검출기
- 이미지 한 장에서 모든 얼굴 검출 (max_num_faces)
- 468개 메시 포인트를 68-point 스킴으로 투영 (픽셀 좌표)
"""

# import mediapipe as mp  # Lazy loaded
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from core.exceptions import FaceDetectorException
from models.landmark_scheme import MESH_TO_68

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass
class FaceBox:
    """Bounding box in pixels"""
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> dict:
        return {
            "x": round(self.x, 1),
            "y": round(self.y, 1),
            "width": round(self.width, 1),
            "height": round(self.height, 1),
        }


@dataclass
class DetectedFace:
    """One detected face: bounding box + 68 landmark points (pixel coordinates)"""
    box: FaceBox
    landmarks: List[Point] = field(default_factory=list)

    def point(self, index: int) -> Point:
        return self.landmarks[index]

    def to_dict(self) -> dict:
        """dict로 변환 (API 응답용)"""
        return {
            "box": self.box.to_dict(),
            "landmarks": [[round(x, 1), round(y, 1)] for x, y in self.landmarks],
        }


def project_landmarks(mesh_points: Sequence[Any], width: int, height: int) -> DetectedFace:
    """
    Convert one face's normalized mesh landmarks to a 68-point DetectedFace

    Args:
        mesh_points: sequence of objects with normalized .x / .y
        width, height: frame size in pixels
    """
    if len(mesh_points) <= max(MESH_TO_68):
        raise FaceDetectorException(
            f"Face mesh has {len(mesh_points)} points, expected at least {max(MESH_TO_68) + 1}"
        )

    xs = [p.x * width for p in mesh_points]
    ys = [p.y * height for p in mesh_points]

    x_min, x_max = min(xs), max(xs)
    y_min, y_max = min(ys), max(ys)
    box = FaceBox(x=x_min, y=y_min, width=x_max - x_min, height=y_max - y_min)

    landmarks = [(xs[idx], ys[idx]) for idx in MESH_TO_68]
    return DetectedFace(box=box, landmarks=landmarks)


class MediaPipeLandmarkDetector:
    """MediaPipe 기반 얼굴 랜드마크 검출기"""

    def __init__(self, max_num_faces: int = 5, min_detection_confidence: float = 0.5):
        """MediaPipe Face Mesh 초기화 (모델 로드)"""
        try:
            import mediapipe as mp
            self.face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=True,
                max_num_faces=max_num_faces,
                refine_landmarks=False,
                min_detection_confidence=min_detection_confidence
            )
        except Exception as e:
            raise FaceDetectorException(f"Failed to load MediaPipe Face Mesh: {e}") from e

        # FaceMesh graphs are not safe for concurrent process() calls
        self._lock = threading.Lock()
        self.max_num_faces = max_num_faces
        logger.info(f"MediaPipe Face Mesh initialized (max_num_faces={max_num_faces})")

    def detect(self, rgb_image: Any) -> List[DetectedFace]:
        """
        Detect all faces in an RGB frame

        Args:
            rgb_image: (height, width, 3) uint8 RGB array

        Returns:
            DetectedFace list in detector output order (empty if none found)
        """
        height, width = rgb_image.shape[:2]

        try:
            with self._lock:
                results = self.face_mesh.process(rgb_image)
        except Exception as e:
            raise FaceDetectorException(f"Face detection failed: {e}") from e

        if not results.multi_face_landmarks:
            logger.debug("No face found in frame")
            return []

        faces = [
            project_landmarks(face.landmark, width, height)
            for face in results.multi_face_landmarks
        ]
        logger.debug(f"Detected {len(faces)} face(s) in {width}x{height} frame")
        return faces

    def close(self) -> None:
        """리소스 정리"""
        if getattr(self, 'face_mesh', None) is not None:
            self.face_mesh.close()
            self.face_mesh = None

    def __del__(self):
        self.close()
