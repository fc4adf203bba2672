"""CLI script to seed the backend DB with the Xavier Institute demo data.
Usage: python scripts/seed_demo.py [--reset]
"""
import sys
import argparse
import pathlib
from datetime import date, datetime
# Ensure the repository root is on sys.path so `school_api` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from school_api.database import engine, create_db_and_tables, drop_db_and_tables
from school_api import schemas, services
from school_api.models import FacilityType, PowerSource, Status, SubjectCategory


def main(reset: bool = False):
    """Create one school with a facility, subject, teacher, student, lesson and achievement.

    With `reset` every table is dropped and recreated first. The created
    ids are printed to stdout for a quick CLI feedback loop.
    """
    if reset:
        drop_db_and_tables()
    create_db_and_tables()
    with Session(engine) as session:
        school = services.SchoolDataService(session).create(schemas.SchoolDataIn(
            school_name="Xavier Institute for Higher Learning",
            location="1407 Graymalkin Lane, Salem Center, NY",
            motto="Mutatis Mutandis",
            year_established=1963,
            affiliation="Mutant Education and Research",
            contact_info="+1-555-XAVIER",
            active=True,
        ))
        school_ref = schemas.Ref(id=school.id)
        facility = services.FacilityService(session).create(schemas.FacilityIn(
            name="Training Room",
            type=FacilityType.CLASSROOM,
            description="A room equipped for training and practice.",
            accessible=True,
            location_within_campus="Main Building, 2nd Floor",
            capacity=30,
            operational=True,
            school_data=school_ref,
        ))
        subject = services.SubjectService(session).create(schemas.SubjectIn(
            name="Psychic Studies", school_data=school_ref,
        ))
        power = schemas.Power(
            power_name="Telekinesis",
            power_level=10,
            power_description="Enables the user to mentally manipulate and move objects without physical contact.",
            power_category="Psychic",
            is_power_active=True,
            control_level=10,
            origin_source=PowerSource.GENETIC_MUTATION,
        )
        teacher = services.TeacherService(session).create(schemas.TeacherIn(
            school_data=school_ref,
            first_name="Charles",
            last_name="Xavier",
            alias="Professor X",
            power=power,
            mission_history=["Formed the X-Men"],
            is_active=True,
            email="professor.xavier@example.com",
            phone_number="+1-555-0303",
            address="1407 Graymalkin Lane, Salem Center, NY",
            qualifications="PhD in Genetics, Mutant Studies",
            years_of_experience=20,
            department="Psychic Studies",
            subjects=[schemas.Ref(id=subject.id)],
        ))
        student = services.StudentService(session).create(schemas.StudentIn(
            school_data=school_ref,
            first_name="Jean",
            last_name="Grey",
            alias="Phoenix",
            power=power,
            mission_history=["Mission X"],
            is_active=True,
            guardian_first_name="John",
            guardian_last_name="Grey",
            guardian_contact_number="+1-555-0101",
            guardian_email="john.grey@example.com",
            contact_number="+1-555-0202",
            email="jean.grey@example.com",
            status=Status.ACTIVE,
        ))
        lesson = services.LessonService(session).create(schemas.LessonIn(
            subject=schemas.Ref(id=subject.id),
            teacher=schemas.Ref(id=teacher.id),
            start_time=datetime(2024, 11, 1, 10, 0),
            end_time=datetime(2024, 11, 1, 11, 30),
            students=[schemas.Ref(id=student.id)],
        ))
        achievement = services.AchievementService(session).create(schemas.AchievementIn(
            title="Outstanding Contribution",
            description="Awarded for innovative contributions to the annual school science fair.",
            date_awarded=date(2021, 5, 21),
            awarded_by="Professor Hank McCoy",
            category=SubjectCategory.BIOLOGY,
            student=schemas.Ref(id=student.id),
        ))
        print(f'Seeded school {school.id}: facility {facility.id}, subject {subject.id}, teacher {teacher.id}, '
              f'student {student.id}, lesson {lesson.id}, achievement {achievement.id}')

if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--reset', action='store_true', help='Drop and recreate all tables before seeding')
    args = parser.parse_args()
    main(reset=args.reset)
