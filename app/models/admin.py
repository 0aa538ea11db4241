from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.database import Base


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(120), nullable=False)
    # promoteur / chef coordonateur / coordonateur / IT supervisor
    role = Column(String(32), nullable=False, default="coordonateur")
    email = Column(String(120), unique=True, nullable=False)
    user = Column(String(50), unique=True, nullable=False)
    password = Column(String(128), nullable=False)

    about_me = Column(Text, nullable=True)
    current_work = Column(String(120), nullable=True)
    profile_image_url = Column(Text, nullable=True)
    whatsapp_number = Column(String(20), nullable=True)

    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
