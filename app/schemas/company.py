from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class CompanyInfoUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    about_us_en: Optional[str] = None
    about_us_fr: Optional[str] = None
    about_image1_url: Optional[str] = None
    about_image2_url: Optional[str] = None
    logo: Optional[str] = None
    contact: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    whatsapp_number: Optional[str] = None
    payment_info: Optional[str] = None


class CompanyInfoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    about_us_en: Optional[str] = None
    about_us_fr: Optional[str] = None
    # about text in the request language
    about_us: Optional[str] = None
    about_image1_url: Optional[str] = None
    about_image2_url: Optional[str] = None
    logo: Optional[str] = None
    contact: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    whatsapp_number: Optional[str] = None
    payment_info: Optional[str] = None
    updated_at: datetime


class WhatsAppLinkOut(BaseModel):
    topic: str
    url: str
    message: str
