"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Each class maps to a table and uses relationships where appropriate.

Ownership and delete cascades:
- a `SchoolData` row owns its students, teachers, subjects and facilities
- a `Student` owns its achievements
- `Teacher` and `Subject` each own the lessons that reference them
- many-to-many link rows go away with either side
"""

import enum
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime
from sqlmodel import SQLModel, Field, Relationship


class Status(str, enum.Enum):
    """Enrollment status of a student."""
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    GRADUATED = "GRADUATED"
    WITHDRAWN = "WITHDRAWN"
    ALUMNUS = "ALUMNUS"
    TRANSFERRED = "TRANSFERRED"
    INACTIVE = "INACTIVE"


class PowerSource(str, enum.Enum):
    """Where a mutant's power comes from."""
    GENETIC_MUTATION = "GENETIC_MUTATION"
    TECHNOLOGY = "TECHNOLOGY"


class FacilityType(str, enum.Enum):
    CLASSROOM = "CLASSROOM"
    GYM = "GYM"
    LIBRARY = "LIBRARY"
    LABORATORY = "LABORATORY"
    AUDITORIUM = "AUDITORIUM"
    TRAINING_CENTER = "TRAINING_CENTER"
    CAFETERIA = "CAFETERIA"
    DORMITORY = "DORMITORY"
    COMPUTER_LAB = "COMPUTER_LAB"
    MEDICAL_CENTER = "MEDICAL_CENTER"
    RECREATION_ROOM = "RECREATION_ROOM"
    ADMINISTRATION_OFFICE = "ADMINISTRATION_OFFICE"
    ART_STUDIO = "ART_STUDIO"
    MUSIC_ROOM = "MUSIC_ROOM"
    COUNSELING_CENTER = "COUNSELING_CENTER"
    SPORTS_FIELD = "SPORTS_FIELD"
    SWIMMING_POOL = "SWIMMING_POOL"
    LAB_FACILITY = "LAB_FACILITY"
    WORKSHOP = "WORKSHOP"
    GREENHOUSE = "GREENHOUSE"
    CHAPEL = "CHAPEL"


class SubjectCategory(str, enum.Enum):
    ACADEMIC = "ACADEMIC"
    ART = "ART"
    PHYSICAL_EDUCATION = "PHYSICAL_EDUCATION"
    TECHNOLOGY = "TECHNOLOGY"
    LANGUAGE = "LANGUAGE"
    SOCIAL_SCIENCE = "SOCIAL_SCIENCE"
    VOCATIONAL = "VOCATIONAL"
    HEALTH = "HEALTH"
    ENVIRONMENTAL_STUDIES = "ENVIRONMENTAL_STUDIES"
    BUSINESS = "BUSINESS"
    MATHEMATICS = "MATHEMATICS"
    COMPUTER_SCIENCE = "COMPUTER_SCIENCE"
    PHYSICS = "PHYSICS"
    CHEMISTRY = "CHEMISTRY"
    BIOLOGY = "BIOLOGY"
    ENGINEERING = "ENGINEERING"
    PSYCHOLOGY = "PSYCHOLOGY"
    PHILOSOPHY = "PHILOSOPHY"
    ECONOMICS = "ECONOMICS"
    FINANCE = "FINANCE"
    GOVERNMENT = "GOVERNMENT"
    LAW = "LAW"
    NUTRITION = "NUTRITION"
    AGRICULTURE = "AGRICULTURE"
    ASTRONOMY = "ASTRONOMY"
    STATISTICS = "STATISTICS"
    MUSIC = "MUSIC"
    DANCE = "DANCE"
    THEATER = "THEATER"
    FOREIGN_LANGUAGE = "FOREIGN_LANGUAGE"
    ARTIFICIAL_INTELLIGENCE = "ARTIFICIAL_INTELLIGENCE"
    ROBOTICS = "ROBOTICS"
    GRAPHIC_DESIGN = "GRAPHIC_DESIGN"
    JOURNALISM = "JOURNALISM"
    ARCHITECTURE = "ARCHITECTURE"


class LessonStudentLink(SQLModel, table=True):
    """Attendance of a `Student` in a `Lesson`."""
    lesson_id: Optional[int] = Field(default=None, foreign_key='lesson.id', primary_key=True)
    student_id: Optional[int] = Field(default=None, foreign_key='student.id', primary_key=True)


class TeacherSubjectLink(SQLModel, table=True):
    """Subjects a `Teacher` is qualified to teach."""
    teacher_id: Optional[int] = Field(default=None, foreign_key='teacher.id', primary_key=True)
    subject_id: Optional[int] = Field(default=None, foreign_key='subject.id', primary_key=True)


class SchoolData(SQLModel, table=True):
    """A school and its metadata.

    Deleting a school deletes every student, teacher, subject and
    facility that belongs to it.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    school_name: Optional[str] = None
    location: Optional[str] = None
    motto: Optional[str] = None
    year_established: int = 0
    affiliation: Optional[str] = None
    contact_info: Optional[str] = None
    active: bool = False
    students: List['Student'] = Relationship(back_populates='school_data', sa_relationship_kwargs={'cascade': 'all'})
    teachers: List['Teacher'] = Relationship(back_populates='school_data', sa_relationship_kwargs={'cascade': 'all'})
    subjects: List['Subject'] = Relationship(back_populates='school_data', sa_relationship_kwargs={'cascade': 'all'})
    facilities: List['Facility'] = Relationship(back_populates='school_data', sa_relationship_kwargs={'cascade': 'all'})


class MutantBase(SQLModel):
    """Columns shared by `Student` and `Teacher`.

    This is not a table: each subclass gets its own copy of the columns.
    `power` holds the embedded power document (see `schemas.Power`) and
    `mission_history` a list of mission names.
    """
    school_data_id: Optional[int] = Field(default=None, foreign_key='schooldata.id')
    first_name: str
    last_name: str
    alias: Optional[str] = None
    power: Optional[dict] = Field(default=None, sa_type=JSON)
    mission_history: List[str] = Field(default_factory=list, sa_type=JSON)
    is_active: bool = False


class Student(MutantBase, table=True):
    """A mutant enrolled at a school."""
    id: Optional[int] = Field(default=None, primary_key=True)
    guardian_first_name: str
    guardian_last_name: str
    guardian_contact_number: str
    guardian_email: Optional[str] = None
    contact_number: str
    email: Optional[str] = None
    status: Status
    school_data: Optional[SchoolData] = Relationship(back_populates='students')
    lessons: List['Lesson'] = Relationship(back_populates='students', link_model=LessonStudentLink)
    achievements: List['Achievement'] = Relationship(back_populates='student', sa_relationship_kwargs={'cascade': 'all'})


class Teacher(MutantBase, table=True):
    """A mutant teaching at a school."""
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str
    phone_number: str
    address: Optional[str] = None
    qualifications: Optional[str] = None
    years_of_experience: int = 0
    department: Optional[str] = None
    school_data: Optional[SchoolData] = Relationship(back_populates='teachers')
    lessons: List['Lesson'] = Relationship(back_populates='teacher', sa_relationship_kwargs={'cascade': 'all, delete-orphan'})
    subjects: List['Subject'] = Relationship(back_populates='teachers', link_model=TeacherSubjectLink)


class Subject(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    school_data_id: Optional[int] = Field(default=None, foreign_key='schooldata.id', nullable=False)
    school_data: Optional[SchoolData] = Relationship(back_populates='subjects')
    lessons: List['Lesson'] = Relationship(back_populates='subject', sa_relationship_kwargs={'cascade': 'all'})
    teachers: List[Teacher] = Relationship(back_populates='subjects', link_model=TeacherSubjectLink)


class Lesson(SQLModel, table=True):
    """A scheduled lesson of a `Subject` given by a `Teacher`."""
    id: Optional[int] = Field(default=None, primary_key=True)
    subject_id: Optional[int] = Field(default=None, foreign_key='subject.id', nullable=False)
    teacher_id: Optional[int] = Field(default=None, foreign_key='teacher.id', nullable=False)
    # naive UTC; offsets are normalized away by the request schema
    start_time: datetime = Field(sa_type=DateTime)
    end_time: datetime = Field(sa_type=DateTime)
    subject: Optional[Subject] = Relationship(back_populates='lessons')
    teacher: Optional[Teacher] = Relationship(back_populates='lessons')
    students: List[Student] = Relationship(back_populates='lessons', link_model=LessonStudentLink)


class Facility(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    type: FacilityType
    description: Optional[str] = None
    accessible: bool = False
    location_within_campus: Optional[str] = None
    capacity: int = 0
    operational: bool = False
    school_data_id: Optional[int] = Field(default=None, foreign_key='schooldata.id', nullable=False)
    school_data: Optional[SchoolData] = Relationship(back_populates='facilities')


class Achievement(SQLModel, table=True):
    """An award given to a `Student`."""
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: str
    date_awarded: date
    awarded_by: str
    category: SubjectCategory
    student_id: Optional[int] = Field(default=None, foreign_key='student.id', nullable=False)
    student: Optional[Student] = Relationship(back_populates='achievements')
