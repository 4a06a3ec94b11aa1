from pydantic import BaseModel
from typing import Optional
from datetime import date


class StudentBase(BaseModel):
    # No field validators here: business rules live in core.validation and
    # are reported as Outcome values instead of raised.
    student_no: Optional[str] = None
    name: Optional[str] = None
    gender: Optional[str] = None  # "male" or "female"
    birth_date: Optional[date] = None
    major: Optional[str] = None
    class_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class Student(StudentBase):
    id: Optional[int] = None

    class Config:
        from_attributes = True
