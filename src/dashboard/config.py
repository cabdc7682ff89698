from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dashboard settings loaded from environment variables.

    Pydantic Settings automatically reads env vars matching field names (case-insensitive).
    In development, it also reads from .env file if present.
    Views and controllers also accept explicit values, so tests never depend on these.
    """

    # REST backend root, e.g. http://localhost:5000/api
    api_base_url: str = "http://localhost:5000/api"
    api_timeout: float = 10.0  # Seconds before httpx gives up on a request

    # List views
    default_page_size: int = 10
    consent_search_debounce: float = 0.5  # Seconds the search box must be idle
    transaction_search_debounce: float = 0.5
    patient_search_debounce: float = 0.3

    # Fetch caps for views that page client-side
    patient_lookup_limit: int = 1000  # Patients loaded to resolve names in the consent list
    patient_option_limit: int = 50  # Patients offered by the consent form dropdown
    transaction_fetch_limit: int = 20

    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env in development
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


settings = Settings()
