"""
Student model for DiamondQuiz
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from app.core.database import Base
import enum

class StudentRole(enum.Enum):
    """Student roles"""
    STUDENT = "student"
    ADMIN = "admin"
    SUPER_ADMIN = "superadmin"

class Student(Base):
    """Student model"""
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)
    email = Column(String, unique=True, index=True, nullable=True)
    role = Column(Enum(StudentRole), default=StudentRole.STUDENT, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
