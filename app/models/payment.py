from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)

    # FCFA, no subunit
    amount = Column(Integer, nullable=False)
    payment_date = Column(Date, nullable=False)
    next_payment_due = Column(Date, nullable=False)
    # pending / completed / failed / overdue
    status = Column(String(16), nullable=False, default="pending")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    student = relationship("Student", back_populates="payments")
    teacher = relationship("Teacher", back_populates="payments")
