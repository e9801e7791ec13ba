from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional
from dateutil import parser

Difficulty = Literal["easy", "medium", "hard"]
SubmissionStatus = Literal["pending", "completed"]


def _check_due_date(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        parser.isoparse(value)
    except (ValueError, OverflowError):
        raise ValueError("due_date must be an ISO-8601 date or datetime")
    return value


class AssignmentCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: Optional[str] = None
    difficulty: Difficulty
    marks: float = Field(gt=0)
    due_date: Optional[str] = None
    thumbnail: Optional[str] = None
    # Must match the authenticated caller when given
    email: Optional[str] = None

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, value):
        return _check_due_date(value)


class AssignmentUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    marks: Optional[float] = Field(default=None, gt=0)
    due_date: Optional[str] = None
    thumbnail: Optional[str] = None

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, value):
        return _check_due_date(value)


class SubmissionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    submit_id: str
    submission_link: Optional[str] = None
    note: Optional[str] = None
    status: SubmissionStatus = "pending"
    # Must match the authenticated caller when given
    examinee: Optional[str] = None


class SubmissionGrade(BaseModel):
    obtainmarks: float = Field(ge=0)
    feedback: Optional[str] = None
    # Grading is one-way: pending -> completed
    status: Literal["completed"] = "completed"
