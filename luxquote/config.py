from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "LuxQuote"
    LOG_LEVEL: str = "INFO"

    # Artwork analysis
    COMPLEXITY_CAP: int = 1000  # drawable elements before cut length is approximated
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024  # 10MB
    DEFAULT_PHYSICAL_WIDTH_MM: float = 100.0

    # Pricing constants (USD), used to build the default PricingConfig
    SETUP_FEE: float = 5.00
    MINIMUM_JOB_COST: float = 10.00
    CUT_COST_PER_MM: float = 0.02
    ENGRAVE_COST_PER_SQ_MM: float = 0.005
    COMPLEXITY_SURCHARGE_FACTOR: float = 0.001

    class Config:
        env_file = ".env"


settings = Settings()
