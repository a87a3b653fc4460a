"""
Configuration management for the SwiftCard service.

Handles environment variables and application settings.
"""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Application configuration class.
    
    Attributes:
        DEBUG: Enable debug mode
        TESTING: Enable testing mode
        SECRET_KEY: Flask secret key
        MAX_CONTENT_LENGTH: Maximum upload file size (16MB default)
        UPLOAD_FOLDER: Directory for stored card images
        OUTPUT_FOLDER: Directory for generated CSV files
        ALLOWED_EXTENSIONS: Allowed image file extensions
        DEFAULT_PROFILE: Extraction profile used when a request names none
    """
    
    # Flask Settings
    DEBUG: bool = os.getenv("SWIFTCARD_DEBUG", "False").lower() == "true"
    TESTING: bool = os.getenv("SWIFTCARD_TESTING", "False").lower() == "true"
    SECRET_KEY: str = os.getenv("SWIFTCARD_SECRET_KEY", "dev-secret-key-change-in-production")
    
    # File Upload Settings
    MAX_CONTENT_LENGTH: int = 16 * 1024 * 1024  # 16MB max file size
    UPLOAD_FOLDER: str = os.getenv("SWIFTCARD_UPLOAD_FOLDER", "uploads")
    OUTPUT_FOLDER: str = os.getenv("SWIFTCARD_OUTPUT_FOLDER", "outputs")
    ALLOWED_EXTENSIONS: set = {"png", "jpg", "jpeg", "gif", "bmp", "webp"}
    
    # OCR Settings
    OCR_LANGUAGES: list = os.getenv("SWIFTCARD_OCR_LANGUAGES", "en").split(",")  # EasyOCR language codes
    OCR_GPU: bool = os.getenv("SWIFTCARD_OCR_GPU", "False").lower() == "true"
    OCR_MODEL_DIR: str = os.getenv("SWIFTCARD_OCR_MODEL_DIR", "./models")
    
    # Extraction Settings
    DEFAULT_PROFILE: str = os.getenv("SWIFTCARD_DEFAULT_PROFILE", "business_card")
    DROP_NOISE_LINES: bool = os.getenv("SWIFTCARD_DROP_NOISE_LINES", "False").lower() == "true"
    
    # Logging
    LOG_LEVEL: str = os.getenv("SWIFTCARD_LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    @classmethod
    def init_app(cls, app) -> None:
        """Initialize Flask app with configuration.
        
        Args:
            app: Flask application instance
        """
        app.config.from_object(cls)
        
        # Create required directories
        os.makedirs(cls.UPLOAD_FOLDER, exist_ok=True)
        os.makedirs(cls.OUTPUT_FOLDER, exist_ok=True)
        
        # Configure logging
        logging.basicConfig(
            level=getattr(logging, cls.LOG_LEVEL.upper()),
            format=cls.LOG_FORMAT
        )
        
        logger.info("Configuration initialized successfully")
    
    @classmethod
    def is_allowed_file(cls, filename: str) -> bool:
        """Check if file extension is allowed.
        
        Args:
            filename: Name of the file to check
            
        Returns:
            True if file extension is allowed, False otherwise
        """
        return "." in filename and \
            filename.rsplit(".", 1)[1].lower() in cls.ALLOWED_EXTENSIONS


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    LOG_LEVEL = "INFO"


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    LOG_LEVEL = "DEBUG"


# Configuration mapping
config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig
}


def get_config(config_name: Optional[str] = None) -> Config:
    """Get configuration class by name.
    
    Args:
        config_name: Configuration name (development, production, testing)
        
    Returns:
        Configuration class
    """
    if config_name is None:
        config_name = os.getenv("SWIFTCARD_ENV", "development")
    return config_by_name.get(config_name, DevelopmentConfig)
