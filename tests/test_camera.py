"""Tests for the OpenCV camera source"""

from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from core.exceptions import CameraAccessDeniedException
from services.camera import CameraSource


@pytest.fixture
def mock_capture():
    capture = MagicMock()
    capture.isOpened.return_value = True
    with patch("services.camera.cv2.VideoCapture", return_value=capture) as factory:
        yield factory, capture


class TestCameraSource:
    """Webcam wrapper"""

    def test_open_sets_resolution(self, mock_capture):
        factory, capture = mock_capture

        camera = CameraSource(index=2, width=640, height=480).open()

        factory.assert_called_once_with(2)
        assert camera.is_open
        assert capture.set.call_count == 2

    def test_denied_camera_raises(self, mock_capture):
        _, capture = mock_capture
        capture.isOpened.return_value = False

        camera = CameraSource()
        with pytest.raises(CameraAccessDeniedException) as exc_info:
            camera.open()

        assert "camera access" in exc_info.value.message
        capture.release.assert_called_once()
        assert not camera.is_open

    def test_read_converts_bgr_to_rgba(self, mock_capture):
        _, capture = mock_capture
        bgr = np.zeros((4, 6, 3), dtype=np.uint8)
        bgr[..., 0] = 30   # blue
        bgr[..., 2] = 200  # red
        capture.read.return_value = (True, bgr)

        camera = CameraSource().open()
        frame = camera.read()

        assert frame.shape == (4, 6, 4)
        assert tuple(frame[0, 0]) == (200, 0, 30, 255)
        assert camera.last_frame is frame

    def test_read_failure_returns_none(self, mock_capture):
        _, capture = mock_capture
        capture.read.return_value = (False, None)

        camera = CameraSource().open()

        assert camera.read() is None
        assert camera.last_frame is None

    def test_read_before_open(self):
        assert CameraSource().read() is None

    def test_context_manager_releases(self, mock_capture):
        _, capture = mock_capture

        with CameraSource() as camera:
            assert camera.is_open

        capture.release.assert_called_once()
        assert not camera.is_open
