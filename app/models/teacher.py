from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(120), nullable=False)
    user = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(120), nullable=False, index=True)
    # bcrypt hash, never the plain password
    password = Column(String(128), nullable=False)
    contact = Column(String(20), nullable=False)

    about_me = Column(Text, nullable=True)
    years_experience = Column(Integer, nullable=False, default=0)
    highest_diploma = Column(String(120), nullable=True)
    town = Column(String(80), nullable=False)
    current_work = Column(String(120), nullable=True)

    subjects = Column(JSON, nullable=False, default=list)
    location = Column(JSON, nullable=False, default=list)
    available_days = Column(JSON, nullable=False, default=list)

    # male / female
    gender = Column(String(10), nullable=False)
    # anglo / franco / bilingue
    category = Column(String(10), nullable=False, index=True)

    profile_image_url = Column(Text, nullable=True)
    profile_image_delete_url = Column(Text, nullable=True)

    is_approved = Column(Boolean, nullable=False, default=False, index=True)
    success_rate = Column(Integer, nullable=False, default=0)
    number_reviews = Column(Integer, nullable=False, default=0)

    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    relations = relationship("StudentTeacherRelation", back_populates="teacher", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="teacher", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="teacher", cascade="all, delete-orphan")
