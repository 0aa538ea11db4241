from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    # ST00A12 style, also used as the login username
    identifier = Column(String(32), unique=True, nullable=False, index=True)
    user = Column(String(32), unique=True, nullable=False, index=True)

    full_name = Column(String(120), nullable=False)
    guardian_name = Column(String(120), nullable=False)
    guardian_phone = Column(String(20), nullable=False)
    class_name = Column("class", String(50), nullable=True)
    quarter = Column(String(80), nullable=True)
    days_per_week = Column(Integer, nullable=False, default=3)
    # anglo / franco / bilingue
    categories = Column(String(10), nullable=False)

    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    relations = relationship("StudentTeacherRelation", back_populates="student", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="student", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="student", cascade="all, delete-orphan")
