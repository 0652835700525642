"""Tests for Face Detection Service"""

import io
from unittest.mock import Mock

import numpy as np
import pytest
from PIL import Image

from core.exceptions import ImageDecodeException, InvalidFileFormatException
from services.face_detection_service import (
    FaceDetectionService,
    decode_image,
    validate_filename,
)


@pytest.fixture
def mock_detector():
    """Mock landmark detector"""
    return Mock()


class TestValidateFilename:
    """Upload extension checks"""

    @pytest.mark.parametrize("filename", ["a.jpg", "a.JPEG", "frame.png", "x.webp"])
    def test_accepts_images(self, filename):
        validate_filename(filename)

    @pytest.mark.parametrize("filename", ["a.txt", "a.gif", "noext", "", None])
    def test_rejects_others(self, filename):
        with pytest.raises(InvalidFileFormatException):
            validate_filename(filename)


class TestDecodeImage:
    """Bytes -> RGBA frame"""

    def test_png_decodes_to_rgba(self, png_factory):
        frame = decode_image(png_factory((200, 100, 50), size=(32, 24)))

        assert frame.shape == (24, 32, 4)
        assert frame.dtype == np.uint8
        assert tuple(frame[5, 5]) == (200, 100, 50, 255)

    def test_jpeg_decodes(self):
        img = Image.new('RGB', (16, 16), color='white')
        buf = io.BytesIO()
        img.save(buf, format='JPEG')

        frame = decode_image(buf.getvalue())

        assert frame.shape == (16, 16, 4)

    def test_garbage_raises(self):
        with pytest.raises(ImageDecodeException):
            decode_image(b"This is not an image")

    def test_empty_raises(self):
        with pytest.raises(ImageDecodeException):
            decode_image(b"")


class TestFaceDetectionService:
    """Test suite for FaceDetectionService"""

    def test_init_with_detector(self, mock_detector):
        service = FaceDetectionService(mock_detector)
        assert service.detector is mock_detector

    def test_detect_faces_passes_rgb_channels(self, mock_detector, rgba_factory, face_factory):
        mock_detector.detect.return_value = [face_factory()]
        frame = rgba_factory((1, 2, 3), width=8, height=6)

        service = FaceDetectionService(mock_detector)
        faces = service.detect_faces(frame)

        assert len(faces) == 1
        rgb = mock_detector.detect.call_args.args[0]
        assert rgb.shape == (6, 8, 3)
        assert rgb.flags["C_CONTIGUOUS"]
        assert tuple(rgb[0, 0]) == (1, 2, 3)

    def test_detect_face_success(self, mock_detector, png_factory, face_factory):
        faces = [face_factory(), face_factory()]
        mock_detector.detect.return_value = faces

        service = FaceDetectionService(mock_detector)
        result = service.detect_face(png_factory(size=(40, 30)))

        assert result["has_face"] is True
        assert result["face_count"] == 2
        assert result["faces"] == faces
        assert result["image"] == {"width": 40, "height": 30}

    def test_detect_face_no_face(self, mock_detector, png_factory):
        mock_detector.detect.return_value = []

        service = FaceDetectionService(mock_detector)
        result = service.detect_face(png_factory())

        assert result["has_face"] is False
        assert result["face_count"] == 0
        assert result["faces"] == []

    def test_detect_face_invalid_bytes(self, mock_detector):
        service = FaceDetectionService(mock_detector)

        with pytest.raises(ImageDecodeException):
            service.detect_face(b"not an image")

        mock_detector.detect.assert_not_called()
