#!/usr/bin/env python
"""
Webcam skin analysis without a browser

사용법:
  python scripts/webcam_analyze.py
  python scripts/webcam_analyze.py --camera 1 --interval-ms 200
  python scripts/webcam_analyze.py --image photo.jpg

Keys (camera mode):
  c  capture a still (only while a face is in view)
  a  analyze the captured still
  q  quit
"""

import argparse
import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import cv2

from config.settings import settings
from core.exceptions import SkinScanException, CameraAccessDeniedException
from core.logging import logger
from models.landmark_detector import MediaPipeLandmarkDetector
from services.camera import CameraSource
from services.capture_session import CaptureSession
from services.detection_loop import DetectionLoop
from services.face_detection_service import FaceDetectionService
from services.report import render_report
from services.skin_analysis_service import SkinAnalysisService

WINDOW_NAME = "SkinScan"


def build_services(max_num_faces: int):
    detector = MediaPipeLandmarkDetector(
        max_num_faces=max_num_faces,
        min_detection_confidence=settings.MIN_DETECTION_CONFIDENCE
    )
    face_service = FaceDetectionService(detector)
    analysis_service = SkinAnalysisService(
        face_service,
        region_landmarks=settings.region_landmarks,
        out_of_bounds=settings.SAMPLE_OUT_OF_BOUNDS
    )
    return detector, face_service, analysis_service


def draw_preview(frame, session: CaptureSession):
    """RGBA frame -> BGR preview with landmarks and control state"""
    preview = cv2.cvtColor(frame, cv2.COLOR_RGBA2BGR)
    for face in session.live_faces:
        for x, y in face.landmarks:
            cv2.circle(preview, (int(x), int(y)), 2, (83, 211, 57), -1)

    status = "c: capture" if session.capture_enabled else "no face"
    if session.analyze_enabled:
        status += " | a: analyze"
    cv2.putText(preview, status, (10, 24), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2)
    return preview


async def run_camera(args) -> int:
    detector, face_service, analysis_service = build_services(args.max_faces)
    session = CaptureSession(analysis_service)
    camera = CameraSource(index=args.camera, width=settings.CAMERA_WIDTH, height=settings.CAMERA_HEIGHT)

    try:
        camera.open()
    except CameraAccessDeniedException as e:
        print(f"❌ {e.message}")
        detector.close()
        return 1

    loop = DetectionLoop(
        frame_source=lambda: camera.last_frame,
        detect=face_service.detect_faces,
        on_result=session.update_faces,
        interval=args.interval_ms / 1000
    )

    try:
        await loop.start()
        while True:
            frame = await asyncio.to_thread(camera.read)
            if frame is not None:
                cv2.imshow(WINDOW_NAME, draw_preview(frame, session))

            key = cv2.waitKey(1) & 0xFF
            if key in (ord('q'), 27):
                break

            if key == ord('c'):
                try:
                    session.capture(frame)
                    print("📸 Captured. Press 'a' to analyze.")
                except SkinScanException as e:
                    print(f"⚠️ {e.message}")

            elif key == ord('a'):
                try:
                    result = await session.analyze_async()
                    print(render_report(result))
                except SkinScanException as e:
                    print(f"❌ Error during analysis: {e.message}")

            await asyncio.sleep(0)
    finally:
        await loop.stop()
        camera.close()
        detector.close()
        cv2.destroyAllWindows()

    return 0


def run_image(args) -> int:
    detector, _, analysis_service = build_services(args.max_faces)
    try:
        image_data = Path(args.image).read_bytes()
        result = analysis_service.analyze(image_data)
        print(render_report(result))
        return 0
    except OSError as e:
        print(f"❌ Cannot read {args.image}: {e}")
        return 1
    except SkinScanException as e:
        print(f"❌ {e.message}")
        return 1
    finally:
        detector.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Webcam skin-type analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--camera', type=int, default=settings.CAMERA_INDEX, help='Camera device index')
    parser.add_argument(
        '--interval-ms',
        type=int,
        default=settings.DETECTION_INTERVAL_MS,
        help='Live detection interval in milliseconds'
    )
    parser.add_argument('--max-faces', type=int, default=settings.MAX_NUM_FACES, help='Maximum faces to detect')
    parser.add_argument('--image', type=str, help='Analyze an image file instead of the camera')
    args = parser.parse_args(argv)

    if args.interval_ms <= 0:
        parser.error("--interval-ms must be positive")

    logger.info("SkinScan webcam tool starting")
    if args.image:
        return run_image(args)
    return asyncio.run(run_camera(args))


if __name__ == "__main__":
    sys.exit(main())
