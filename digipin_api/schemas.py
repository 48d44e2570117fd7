# digipin_api/schemas.py
from typing import Optional

from pydantic import BaseModel, Field


class EncodeRequest(BaseModel):
    # Optional so a missing field reaches the handler and gets the 400 message
    latitude: Optional[float] = Field(None, description="Latitude in decimal degrees")
    longitude: Optional[float] = Field(None, description="Longitude in decimal degrees")


class EncodeResponse(BaseModel):
    digipin: str


class DecodeRequest(BaseModel):
    digipin: Optional[str] = Field(None, description="DIGIPIN, hyphens optional")


class DecodeResponse(BaseModel):
    latitude: float
    longitude: float
