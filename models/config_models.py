"""Pydantic models for export configuration"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Literal, Optional


class ApigeeConfig(BaseModel):
    """Connection settings for one Apigee organization"""
    model_config = ConfigDict(extra="forbid")

    organization: str = Field(..., description="Apigee organization name", min_length=1)
    base_url: str = Field(
        default="https://apigee.googleapis.com/v1",
        description="Management API base URL"
    )
    token: Optional[str] = Field(None, description="OAuth2 access token")
    service_account_key_path: Optional[str] = Field(
        None,
        description="Path to a service account JSON key file"
    )
    page_size: int = Field(default=1000, ge=1, description="Products requested per page")

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")


class ExportConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    format: Literal["yaml", "json"] = "yaml"
    output: Optional[str] = None
