"""
Application configuration using Pydantic Settings
"""

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    # Storage
    data_dir: Path = Path("./data")
    restaurants_file: str = "restaurants.csv"
    sections_file: str = "sections.csv"
    tables_file: str = "tables.csv"
    customers_file: str = "customers.csv"
    reservations_file: str = "reservations.csv"
    
    # Scheduling
    reservation_duration_minutes: int = 120
    past_reservation_tolerance_minutes: int = 60
    
    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    cors_origins: str = "http://localhost:3000"
    
    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    
    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]
    
    def data_path(self, file_name: str) -> Path:
        return self.data_dir / file_name
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
