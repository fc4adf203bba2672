"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests. JSON keys are camelCase; snake_case field
names are accepted on input too.

Request schemas (`*In`) carry references to other rows as `{"id": ...}`
objects. Response schemas (`*Out`) render references in the foreign-key
direction as nested objects and leave out back-references (a school's
collections, a student's lessons, ...) so that payloads never cycle.
"""

from datetime import date, datetime, timezone
from typing import Annotated, List, Optional

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import FacilityType, PowerSource, Status, SubjectCategory


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError('must not be blank')
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# Offset-bearing timestamps are shifted to UTC; naive ones are taken as UTC already.
UtcDatetime = Annotated[datetime, AfterValidator(_to_naive_utc)]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Ref(ApiModel):
    """Reference to an existing row. Keys other than `id` are ignored."""
    id: int


class Power(ApiModel):
    """Embedded description of a mutant power."""
    power_name: Optional[str] = None
    power_level: int = 0
    power_description: Optional[str] = None
    power_category: Optional[str] = None
    is_power_active: bool = False
    control_level: int = 0
    origin_source: Optional[PowerSource] = None


class SchoolDataIn(ApiModel):
    school_name: Optional[str] = None
    location: Optional[str] = None
    motto: Optional[str] = None
    year_established: int = 0
    affiliation: Optional[str] = None
    contact_info: Optional[str] = None
    active: bool = Field(default=False, validation_alias=AliasChoices('active', 'isActive'))


class SchoolDataOut(SchoolDataIn):
    id: int


class SubjectFields(ApiModel):
    name: NonBlankStr


class SubjectIn(SubjectFields):
    school_data: Ref


class SubjectOut(SubjectFields):
    id: int
    school_data: Optional[SchoolDataOut] = None


class MutantFields(ApiModel):
    """Fields shared by students and teachers."""
    first_name: NonBlankStr
    last_name: NonBlankStr
    alias: Optional[str] = None
    power: Optional[Power] = None
    mission_history: List[str] = Field(default_factory=list)
    is_active: bool

    @field_validator('mission_history', mode='before')
    @classmethod
    def _missions_default(cls, value):
        return [] if value is None else value


class StudentFields(MutantFields):
    guardian_first_name: NonBlankStr
    guardian_last_name: NonBlankStr
    guardian_contact_number: NonBlankStr
    guardian_email: Optional[str] = None
    contact_number: NonBlankStr
    email: Optional[str] = None
    status: Status


class StudentIn(StudentFields):
    school_data: Optional[Ref] = None


class StudentOut(StudentFields):
    id: int
    school_data: Optional[SchoolDataOut] = None


class TeacherFields(MutantFields):
    email: NonBlankStr
    phone_number: NonBlankStr
    address: Optional[str] = None
    qualifications: Optional[str] = None
    years_of_experience: int = 0
    department: Optional[str] = None


class TeacherIn(TeacherFields):
    school_data: Optional[Ref] = None
    subjects: List[Ref] = Field(default_factory=list)


class TeacherOut(TeacherFields):
    id: int
    school_data: Optional[SchoolDataOut] = None
    subjects: List[SubjectOut] = Field(default_factory=list)


class LessonFields(ApiModel):
    start_time: UtcDatetime
    end_time: UtcDatetime


class LessonIn(LessonFields):
    subject: Ref
    teacher: Ref
    students: List[Ref] = Field(default_factory=list)


class LessonOut(LessonFields):
    id: int
    subject: SubjectOut
    teacher: TeacherOut
    students: List[StudentOut] = Field(default_factory=list)


class FacilityFields(ApiModel):
    name: str
    type: FacilityType
    description: Optional[str] = None
    accessible: bool = Field(default=False, validation_alias=AliasChoices('accessible', 'isAccessible'))
    location_within_campus: Optional[str] = None
    capacity: int = 0
    operational: bool = Field(default=False, validation_alias=AliasChoices('operational', 'isOperational'))


class FacilityIn(FacilityFields):
    school_data: Ref


class FacilityOut(FacilityFields):
    id: int
    school_data: Optional[SchoolDataOut] = None


class AchievementFields(ApiModel):
    title: str
    description: str
    date_awarded: date
    awarded_by: str
    category: SubjectCategory


class AchievementIn(AchievementFields):
    student: Ref


class AchievementOut(AchievementFields):
    id: int
    student: StudentOut
