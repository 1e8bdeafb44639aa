"""Application settings."""

import os
from typing import Optional
from pydantic import BaseModel

from llm.deepseek_client import DEFAULT_API_URL


class Settings(BaseModel):
    """Application configuration settings."""

    # Catalog file
    catalog_path: str = "data/parfums.json"

    # Completion service
    deepseek_api_key: Optional[str] = None
    deepseek_api_url: str = DEFAULT_API_URL
    llm_model: str = "deepseek-chat"
    request_timeout: int = 30

    # Language the consultant answers in
    response_language: str = "Indonesian"

    # Logging
    verbose: bool = False

    def __init__(self, **data):
        # Auto-load from environment if not provided
        if data.get("deepseek_api_key") is None:
            data["deepseek_api_key"] = os.environ.get("DEEPSEEK_API_KEY")

        if data.get("deepseek_api_url") is None:
            data["deepseek_api_url"] = os.environ.get("DEEPSEEK_API_URL") or DEFAULT_API_URL

        if data.get("catalog_path") is None:
            data["catalog_path"] = os.environ.get("PARFUM_CATALOG_PATH") or "data/parfums.json"

        super().__init__(**data)
