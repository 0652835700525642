"""Tests for the webcam command-line tool"""

from unittest.mock import Mock, patch

import pytest

from core.exceptions import CameraAccessDeniedException
from scripts import webcam_analyze
from services.face_detection_service import FaceDetectionService
from services.skin_analysis_service import SkinAnalysisService


@pytest.fixture
def fake_services(fake_detector):
    detector = Mock()
    face_service = FaceDetectionService(fake_detector)
    analysis_service = SkinAnalysisService(face_service)
    with patch.object(webcam_analyze, "build_services", return_value=(detector, face_service, analysis_service)):
        yield detector


def test_interval_must_be_positive():
    with pytest.raises(SystemExit):
        webcam_analyze.main(["--interval-ms", "0"])


def test_image_mode_prints_report(fake_services, png_factory, tmp_path, capsys):
    image = tmp_path / "face.png"
    image.write_bytes(png_factory((60, 150, 60)))

    exit_code = webcam_analyze.main(["--image", str(image)])

    assert exit_code == 0
    assert "Your Skin Type: Oily" in capsys.readouterr().out
    fake_services.close.assert_called_once()


def test_image_mode_no_face(fake_services, fake_detector, png_factory, tmp_path, capsys):
    fake_detector.faces = []
    image = tmp_path / "empty.png"
    image.write_bytes(png_factory())

    assert webcam_analyze.main(["--image", str(image)]) == 1
    assert "No face detected" in capsys.readouterr().out


def test_image_mode_missing_file(fake_services, tmp_path):
    assert webcam_analyze.main(["--image", str(tmp_path / "nope.png")]) == 1
    fake_services.close.assert_called_once()


def test_camera_denied(fake_services, capsys):
    camera = Mock()
    camera.open.side_effect = CameraAccessDeniedException()

    with patch.object(webcam_analyze, "CameraSource", return_value=camera):
        exit_code = webcam_analyze.main([])

    assert exit_code == 1
    assert "Please enable camera access" in capsys.readouterr().out
    fake_services.close.assert_called_once()
