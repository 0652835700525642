"""Face detection and skin analysis endpoints"""

import time
import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services.face_detection_service import FaceDetectionService
    from services.skin_analysis_service import SkinAnalysisService

from fastapi import APIRouter, File, UploadFile, Request, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import AnalyzeResponse, DetectResponse, ErrorResponse
from config.settings import settings
from core.logging import logger, log_structured
from core.exceptions import (
    SkinScanException,
    NoFaceDetectedException,
    InvalidFileFormatException,
    ImageDecodeException,
    LandmarkOutOfBoundsException,
    FaceDetectorException
)
from core.dependencies import get_face_detection_service, get_skin_analysis_service
from core.monitoring import add_breadcrumb, capture_exception
from services.face_detection_service import validate_filename


router = APIRouter()

# Rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# ========== Helper Functions ==========
def error_name(exc: SkinScanException) -> str:
    """NoFaceDetectedException -> "nofacedetected" """
    return exc.__class__.__name__.replace("Exception", "").lower()


def error_response(status_code: int, exc: SkinScanException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error_name(exc),
            "message": exc.message
        }
    )


def status_for(exc: SkinScanException) -> int:
    if isinstance(exc, LandmarkOutOfBoundsException):
        return 422
    if isinstance(exc, FaceDetectorException):
        return 500
    return 400


# ========== API Endpoints ==========
@router.post("/detect", response_model=DetectResponse, responses=ERROR_RESPONSES)
@limiter.limit(settings.DETECT_RATE_LIMIT)
async def detect_faces(
    request: Request,
    file: UploadFile = File(...),
    face_detector: 'FaceDetectionService' = Depends(get_face_detection_service)
):
    """
    Live-preview detection on a single frame

    The page calls this on a fixed interval and enables its capture button
    while face_count > 0.
    """
    try:
        validate_filename(file.filename)
        image_data = await file.read()

        result = await run_in_threadpool(face_detector.detect_face, image_data)

        return {
            "success": True,
            "face_count": result["face_count"],
            "faces": [face.to_dict() for face in result["faces"]],
            "image": result["image"]
        }

    except (InvalidFileFormatException, ImageDecodeException, FaceDetectorException) as e:
        return error_response(status_for(e), e)
    except Exception as e:
        logger.error(f"Live detection error: {str(e)}\n{traceback.format_exc()}")
        capture_exception(e, tags={"endpoint": "detect"})
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "internal_error",
                "message": f"Detection failed: {str(e)}"
            }
        )


@router.post("/analyze", response_model=AnalyzeResponse, responses=ERROR_RESPONSES)
@limiter.limit(settings.ANALYZE_RATE_LIMIT)
async def analyze_skin(
    request: Request,
    file: UploadFile = File(...),
    analyzer: 'SkinAnalysisService' = Depends(get_skin_analysis_service)
):
    """
    Skin analysis of a captured still

    Detection runs again on the still; the first detected face is sampled at
    the forehead, cheek and chin landmarks and classified.
    """
    start_time = time.time()

    try:
        validate_filename(file.filename)
        image_data = await file.read()

        log_structured("analysis_start", {
            "filename": file.filename,
            "file_size_kb": round(len(image_data) / 1024, 2)
        })

        result = await run_in_threadpool(analyzer.analyze, image_data)
        total_time = round(time.time() - start_time, 3)

        log_structured("analysis_complete", {
            "skin_type": result.skin_type.value,
            "face_count": result.face_count,
            "processing_time": total_time
        })
        add_breadcrumb(
            "Skin analysis finished",
            category="analysis",
            data={"skin_type": result.skin_type.value, "processing_time": total_time}
        )

        return {
            "success": True,
            "data": result.to_dict(),
            "processing_time": total_time
        }

    except (
        NoFaceDetectedException,
        InvalidFileFormatException,
        ImageDecodeException,
        LandmarkOutOfBoundsException,
        FaceDetectorException
    ) as e:
        log_structured("analysis_error", {
            "error_type": error_name(e),
            "error_message": e.message
        })
        return error_response(status_for(e), e)
    except Exception as e:
        logger.error(f"Analysis error: {str(e)}\n{traceback.format_exc()}")
        capture_exception(e, tags={"endpoint": "analyze"})

        log_structured("analysis_error", {
            "error_type": "internal_error",
            "error_message": str(e)
        })

        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "internal_error",
                "message": f"Error during analysis: {str(e)}"
            }
        )
