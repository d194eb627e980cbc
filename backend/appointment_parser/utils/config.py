from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    default_timezone: str = "Asia/Kolkata"
    # Controlled vocabulary; sorted longest-first once at startup
    departments: List[str] = [
        "dentist",
        "cardiologist",
        "neurologist",
        "orthopedic",
        "dermatologist",
        "ent",
    ]
    department_fuzzy_threshold: float = 0.75  # extractor acceptance
    department_accept_threshold: float = 0.70  # guardrail acceptance
    date_fuzzy_threshold: float = 0.70
    use_natural_language_parser: bool = True
    ocr_language: str = "eng"
    tesseract_cmd: Optional[str] = None  # None uses tesseract from PATH
    port: int = 8000
    host: str = "0.0.0.0"
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
