"""Application settings and configuration management using Pydantic Settings"""

import logging
from typing import List, Literal
from pydantic import Field
from pydantic_settings import BaseSettings

from models.landmark_scheme import NUM_LANDMARKS

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    STATIC_DIR: str = "public"
    MAX_BODY_SIZE: int = 50 * 1024 * 1024  # 50MB

    # Security Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000"  # Comma-separated list
    ANALYZE_RATE_LIMIT: str = "30/minute"
    DETECT_RATE_LIMIT: str = "600/minute"
    RATE_LIMIT_ENABLED: bool = True

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    # Face Detector (MediaPipe Face Mesh)
    MAX_NUM_FACES: int = 5
    MIN_DETECTION_CONFIDENCE: float = 0.5

    # 68-point landmark indices sampled for skin analysis
    CHEEK_LANDMARK: int = Field(1, ge=0, lt=NUM_LANDMARKS)
    CHIN_LANDMARK: int = Field(8, ge=0, lt=NUM_LANDMARKS)
    FOREHEAD_LANDMARK: int = Field(20, ge=0, lt=NUM_LANDMARKS)

    # "clamp" moves off-frame points to the nearest edge pixel, "error" rejects them
    SAMPLE_OUT_OF_BOUNDS: Literal["clamp", "error"] = "clamp"

    # Live capture loop
    DETECTION_INTERVAL_MS: int = 100
    CAMERA_INDEX: int = 0
    CAMERA_WIDTH: int = 640
    CAMERA_HEIGHT: int = 480

    # Logging Configuration
    LOG_LEVEL: str = "INFO"

    # Environment Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Application Info
    APP_TITLE: str = "SkinScan API"
    APP_DESCRIPTION: str = "Webcam skin-type analysis from facial landmark color sampling"
    APP_VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def region_landmarks(self) -> dict:
        """Region name -> 68-point landmark index"""
        return {
            "forehead": self.FOREHEAD_LANDMARK,
            "cheek": self.CHEEK_LANDMARK,
            "chin": self.CHIN_LANDMARK,
        }


# Singleton instance
settings = Settings()
