"""Repository classes encapsulating database operations.

Every aggregate gets the same small contract from `CrudRepository`:
`save`, `find_all`, `find_by_id` and `delete_by_id`. Repositories return
SQLModel objects and perform commits/refreshes where appropriate. There
are no custom queries.
"""

from typing import List, Optional, Type

from sqlmodel import Session, SQLModel, select

from . import models


class CrudRepository:
    """CRUD operations for the SQLModel table named by `model`."""
    model: Type[SQLModel]

    def __init__(self, session: Session):
        self.session = session

    def save(self, entity):
        """Insert or update `entity` and return the managed instance.

        Whether this is an insert or an update depends on whether the
        instance already has a persistent identity in the session.
        """
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def find_all(self) -> List:
        """Return every row of the table, in id order."""
        stmt = select(self.model).order_by(self.model.id)
        return self.session.exec(stmt).all()

    def find_by_id(self, entity_id: int) -> Optional[SQLModel]:
        """Fetch a row by primary key or `None` if not found."""
        return self.session.get(self.model, entity_id)

    def delete_by_id(self, entity_id: int) -> None:
        """Delete a row by primary key; unknown ids are ignored.

        Dependent rows are removed through the relationship cascades
        declared on the models.
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            return
        self.session.delete(entity)
        self.session.commit()


class SchoolDataRepository(CrudRepository):
    model = models.SchoolData


class StudentRepository(CrudRepository):
    model = models.Student


class TeacherRepository(CrudRepository):
    model = models.Teacher


class SubjectRepository(CrudRepository):
    model = models.Subject


class LessonRepository(CrudRepository):
    model = models.Lesson


class FacilityRepository(CrudRepository):
    model = models.Facility


class AchievementRepository(CrudRepository):
    model = models.Achievement
