from typing import Optional
import io

import pytesseract
from PIL import Image, UnidentifiedImageError

from ..utils.config import settings
from ..utils.logger import logger

class OCRError(Exception):
    pass

class TesseractOCRClient:
    def __init__(self, language: str = "eng", tesseract_cmd: Optional[str] = None):
        self.language = language

        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

        logger.info(f"Initialized Tesseract OCR client (language={language})")

    def extract_text(self, image_bytes: bytes) -> str:
        if not image_bytes:
            raise ValueError("Uploaded file is empty")

        try:
            image = Image.open(io.BytesIO(image_bytes))
        except UnidentifiedImageError as e:
            logger.error(f"Uploaded file is not a readable image: {e}")
            raise ValueError("Uploaded file is not a readable image")

        try:
            text = pytesseract.image_to_string(image.convert("L"), lang=self.language)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            logger.error(f"OCR engine error: {e}")
            raise OCRError(str(e))

        text = (text or "").strip()
        logger.info(f"OCR extracted {len(text)} characters")
        return text

ocr_client = TesseractOCRClient(
    language=settings.ocr_language,
    tesseract_cmd=settings.tesseract_cmd
)
