"""
Configuration settings for range_lp

Loads environment variables and provides application configuration.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings"""

    # API Configuration
    API_VERSION: str = "0.1.0"
    API_TITLE: str = "Range Liquidity API"
    API_DESCRIPTION: str = "Width-based tick range computation and liquidity provisioning for Uniswap V3 pools"

    # The Graph API
    GRAPH_API_KEY: str = os.getenv("GRAPH_API_KEY", "")
    CHAIN: str = os.getenv("CHAIN", "ethereum")

    # Range Configuration
    DEFAULT_WIDTH_BPS: int = int(os.getenv("DEFAULT_WIDTH_BPS", 1000))
    TICK_ALIGNMENT: str = os.getenv("TICK_ALIGNMENT", "floor").lower()
    DEFAULT_SLIPPAGE_BPS: int = int(os.getenv("DEFAULT_SLIPPAGE_BPS", 0))

    # CORS Configuration
    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000"
    ).split(",")

    # Server Configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8000))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


# Create global settings instance
settings = Settings()
