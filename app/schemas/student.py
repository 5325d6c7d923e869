from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

# Largest value a 32-bit signed INTEGER id column can hold
MAX_STUDENT_ID = 2**31 - 1


class StudentBase(BaseModel):
    fullName: str = Field(validation_alias=AliasChoices("fullName", "full_name"))
    email: EmailStr
    major: Optional[str] = None

    @field_validator("fullName")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("major", mode="before")
    @classmethod
    def blank_major_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class StudentCreate(StudentBase):
    studentCode: str = Field(validation_alias=AliasChoices("studentCode", "student_code"))

    @field_validator("studentCode")
    @classmethod
    def code_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class StudentUpdate(StudentBase):
    """Editable fields only: studentCode is fixed at creation."""
    pass


class Student(BaseModel):
    id: int
    studentCode: str = Field(validation_alias=AliasChoices("studentCode", "student_code"))
    fullName: str = Field(validation_alias=AliasChoices("fullName", "full_name"))
    email: Optional[str] = None
    major: Optional[str] = None
    createdAt: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )

    model_config = ConfigDict(from_attributes=True)
