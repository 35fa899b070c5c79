from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "FareWise"
    PROJECT_DESCRIPTION: str = "Fare-aware public transport route ranking and trip planning"
    VERSION: str = "0.3.0"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Routing backend settings
    ROUTING_API_URL: str = "http://localhost:8000"
    ROUTING_API_KEY: str = ""
    ROUTING_TIMEOUT_SECONDS: float = 180.0
    STOP_SEARCH_LIMIT: int = 10

    # Geocoding (Nominatim) settings
    GEOCODING_API_URL: str = "https://nominatim.openstreetmap.org"
    GEOCODING_COUNTRY_CODES: str = "ph"
    GEOCODING_USER_AGENT: str = "FareWise/0.3"
    GEOCODING_RESULT_LIMIT: int = 5
    GEOCODING_TIMEOUT_SECONDS: float = 10.0

    # Default ceilings applied to route searches
    DEFAULT_MAX_BUDGET: float = 500.0
    DEFAULT_MAX_TIME: float = 180.0
    DEFAULT_MAX_TRANSFERS: int = 3

    # Sent to the routing backend with every plan request
    DEFAULT_ESTIMATED_BUDGET: float = 200.0
    DEFAULT_PREFERRED_MODES: List[str] = ["walk", "jeepney", "bus", "lrt", "mrt", "pnr"]

    class ConfigDict:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
