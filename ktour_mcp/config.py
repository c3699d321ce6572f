from dotenv import load_dotenv
load_dotenv()

import os
from pydantic import BaseModel, Field, HttpUrl, ValidationError


class Settings(BaseModel):
    # TourAPI (KorService1) endpoint & service key (REQUIRED)
    base_url: HttpUrl = Field(
        default=os.getenv("TOUR_API_BASE_URL") or "http://apis.data.go.kr/B551011/KorService1"
    )
    api_key: str = Field(..., alias="TOUR_API_KEY")

    # HTTP
    timeout_s: float = 30.0

    # fixed query defaults sent with every call
    mobile_os: str = "ETC"
    mobile_app: str = "ktour-api"
    num_of_rows: int = 10
    page_no: int = 1


def load_settings() -> Settings:
    env = {
        "TOUR_API_KEY": os.getenv("TOUR_API_KEY"),
        # base_url is automatically set by default
    }
    timeout = os.getenv("TOUR_API_TIMEOUT_S")
    if timeout:
        env["timeout_s"] = timeout
    try:
        return Settings.model_validate(env)
    except ValidationError as e:
        raise RuntimeError(
            "Config error: set ENV TOUR_API_KEY (and optionally TOUR_API_BASE_URL, TOUR_API_TIMEOUT_S)."
        ) from e
