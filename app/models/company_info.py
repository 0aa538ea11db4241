from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.database import Base


class CompanyInfo(Base):
    __tablename__ = "company_info"

    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False, default="SmartGen Educ")
    about_us_en = Column(Text, nullable=True)
    about_us_fr = Column(Text, nullable=True)
    about_image1_url = Column(Text, nullable=True)
    about_image2_url = Column(Text, nullable=True)
    logo = Column(Text, nullable=True)

    contact = Column(String(30), nullable=True)
    address = Column(String(200), nullable=True)
    email = Column(String(120), nullable=True)
    location = Column(String(200), nullable=True)
    whatsapp_number = Column(String(20), nullable=True)
    payment_info = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
