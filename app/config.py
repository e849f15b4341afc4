from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    price_api_base_url: str = "http://localhost:8000/api"
    price_api_token: str = ""
    request_timeout: float = 30.0
    label_locale: str = "ko"
    log_level: str = "INFO"
