"""Custom exception classes for SkinScan"""


class SkinScanException(Exception):
    """Base exception for SkinScan application"""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class CameraAccessDeniedException(SkinScanException):
    """Raised when the camera device cannot be opened"""

    def __init__(self, message: str = "Please enable camera access to use this application."):
        super().__init__(message)


class NoFaceDetectedException(SkinScanException):
    """Raised when no face is detected in the captured image"""

    def __init__(self, message: str = "No face detected in the captured image"):
        super().__init__(message)


class InvalidFileFormatException(SkinScanException):
    """Raised when uploaded file format is invalid"""

    def __init__(self, message: str = "Unsupported file format (jpg, jpeg, png, webp only)"):
        super().__init__(message)


class ImageDecodeException(SkinScanException):
    """Raised when uploaded bytes cannot be decoded as an image"""

    def __init__(self, message: str = "Could not decode the uploaded image"):
        super().__init__(message)


class LandmarkOutOfBoundsException(SkinScanException):
    """Raised when a sample point falls outside the captured frame"""

    def __init__(self, x: float, y: float, width: int, height: int, message: str = None):
        if message is None:
            message = f"Sample point ({x:.1f}, {y:.1f}) lies outside the {width}x{height} frame"
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(message)


class FaceDetectorException(SkinScanException):
    """Raised when the face landmark detector fails to load or run"""

    def __init__(self, message: str = "Face detection failed"):
        super().__init__(message)
