"""Image text recovery for uploaded appointment requests."""

from .tesseract_client import ocr_client, TesseractOCRClient, OCRError

__all__ = [
    "ocr_client",
    "TesseractOCRClient",
    "OCRError"
]
