from sqlalchemy import Column, Integer, String, Date
from ..database import Base


class Student(Base):
    """One row per student; student_no is the business key"""
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    student_no = Column(String(20), unique=True, index=True, nullable=False)
    name = Column(String(50), nullable=False)
    gender = Column(String(10), nullable=False)  # male, female
    birth_date = Column(Date, nullable=False)
    major = Column(String(100), nullable=False, index=True)
    class_name = Column(String(50), nullable=False)
    phone = Column(String(20))
    email = Column(String(100))
    address = Column(String(255))
