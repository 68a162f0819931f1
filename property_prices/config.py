from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # HM Land Registry SPARQL endpoint
    land_registry_endpoint: str = "https://landregistry.data.gov.uk/landregistry/query"
    sparql_timeout: float | None = None  # None disables the httpx timeout

    # Code-Point Open reference table (built by property_prices.data.build_postcodes)
    postcode_db_path: str = "data/postcodes.sqlite"
    codepo_csv_dir: str = "codepo_gb/Data/CSV"

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
