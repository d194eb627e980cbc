"""
Appointment Request Parser - Main FastAPI Application
Turns typed or photographed appointment requests into structured appointment intents.
"""

from fastapi import FastAPI, HTTPException, Request, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from json import JSONDecodeError

from .pipeline.graph import parse_pipeline
from .ocr.tesseract_client import ocr_client, OCRError
from .utils.config import settings
from .utils.logger import logger

# Initialize FastAPI app
app = FastAPI(
    title="Appointment Request Parser",
    description="Parses free-form appointment requests into department, date, time and timezone",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Appointment Request Parser",
        "version": "1.0.0"
    }

@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "components": {
            "api": "operational",
            "pipeline": "ready",
            "timezone": settings.default_timezone
        }
    }

# Parsing Endpoints

@app.post("/ai_task/parse/text")
async def parse_text(request: Request):
    """
    Parse a typed appointment request.

    Request body:
        {
            "text": "string"
        }
    """
    try:
        body = await request.json()
    except JSONDecodeError:
        raise HTTPException(status_code=400, detail="Request body must be JSON")

    text = body.get("text") if isinstance(body, dict) else None
    if not isinstance(text, str):
        raise HTTPException(status_code=400, detail="text is required")

    result = parse_pipeline.parse_text(text)
    logger.info(f"Parsed text request: status={result.status}")
    return result.model_dump()

@app.post("/ai_task/parse/image")
async def parse_image(file: UploadFile = File(...)):
    """
    Parse an uploaded image: OCR -> normalization -> extraction -> resolution.
    """
    image_bytes = await file.read()

    try:
        text = ocr_client.extract_text(image_bytes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OCRError as e:
        raise HTTPException(status_code=500, detail=f"OCR engine error: {e}")

    result = parse_pipeline.parse_text(text)
    logger.info(f"Parsed image request '{file.filename}': status={result.status}")
    return result.model_dump()

# Application Startup

@app.on_event("startup")
async def startup_event():
    """Log configuration on startup."""
    logger.info("Starting Appointment Request Parser")
    logger.info(f"Timezone: {settings.default_timezone}")
    logger.info(f"Environment: {settings.environment}")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "appointment_parser.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
