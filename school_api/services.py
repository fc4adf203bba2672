"""Business logic services used by HTTP controllers.

Services are intentionally thin: they resolve references to other rows,
copy request payloads onto models and persist them via repositories.

Updates are selective. Each service names the model attributes a PUT
may overwrite in its `UPDATE_FIELDS` allow-list; anything else in the
replacement payload is ignored and the stored value is kept.
"""

import logging
from typing import Dict, Tuple, Type

from pydantic import BaseModel
from sqlmodel import Session, SQLModel

from . import models, repositories

logger = logging.getLogger("school_api.services")


class NotFoundError(LookupError):
    """Raised when an update targets an id with no stored row."""


class InvalidReferenceError(ValueError):
    """Raised when a payload references a row that does not exist."""


def not_found_message(entity_name: str, entity_id: int) -> str:
    return f"{entity_name} not found with id {entity_id}"


class CrudService:
    """Create, list, get, update and delete rows of one aggregate.

    Subclasses configure:
    - `repository_class`: the repository used for persistence
    - `entity_name`: the name used in error messages
    - `REFERENCES`: payload fields holding references, mapped to the
      referenced model and its entity name
    - `UPDATE_FIELDS`: the attributes `update` is allowed to overwrite
    """
    repository_class: Type[repositories.CrudRepository] = repositories.CrudRepository
    entity_name = "Entity"
    REFERENCES: Dict[str, Tuple[Type[SQLModel], str]] = {}
    UPDATE_FIELDS: Tuple[str, ...] = ()

    def __init__(self, session: Session):
        self.session = session
        self.repo = self.repository_class(session)

    def create(self, candidate: BaseModel):
        """Persist `candidate` as a new row and return it with its id."""
        values = self._values(candidate, type(candidate).model_fields)
        entity = self.repo.save(self.repo.model(**values))
        logger.info("created %s id=%s", self.entity_name, entity.id)
        return entity

    def list_all(self):
        return self.repo.find_all()

    def get_by_id(self, entity_id: int):
        return self.repo.find_by_id(entity_id)

    def update(self, entity_id: int, replacement: BaseModel):
        """Overwrite the allow-listed fields of row `entity_id`.

        Raises `NotFoundError` if the row does not exist and
        `InvalidReferenceError` if the replacement points at a missing row.
        """
        entity = self.repo.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(not_found_message(self.entity_name, entity_id))
        values = self._values(replacement, self.UPDATE_FIELDS)
        for name in self.UPDATE_FIELDS:
            setattr(entity, name, values[name])
        entity = self.repo.save(entity)
        logger.info("updated %s id=%s fields=%s", self.entity_name, entity_id, ",".join(self.UPDATE_FIELDS))
        return entity

    def delete(self, entity_id: int) -> None:
        self.repo.delete_by_id(entity_id)
        logger.info("deleted %s id=%s", self.entity_name, entity_id)

    def _values(self, payload: BaseModel, fields) -> dict:
        """Build model attribute values for `fields` from a request payload."""
        values = {}
        for name in fields:
            value = getattr(payload, name)
            if name in self.REFERENCES:
                model, entity_name = self.REFERENCES[name]
                if isinstance(value, list):
                    value = [self._resolve(model, entity_name, ref) for ref in value]
                else:
                    value = self._resolve(model, entity_name, value)
            elif isinstance(value, BaseModel):
                # embedded value objects are stored as JSON documents
                value = value.model_dump(mode="json")
            elif isinstance(value, list):
                value = list(value)
            values[name] = value
        return values

    def _resolve(self, model: Type[SQLModel], entity_name: str, ref):
        if ref is None:
            return None
        row = self.session.get(model, ref.id)
        if row is None:
            logger.warning("unresolved reference %s id=%s", entity_name, ref.id)
            raise InvalidReferenceError(not_found_message(entity_name, ref.id))
        return row


class SchoolDataService(CrudService):
    repository_class = repositories.SchoolDataRepository
    entity_name = "School data"
    UPDATE_FIELDS = (
        "school_name",
        "location",
        "motto",
        "year_established",
        "affiliation",
        "contact_info",
        "active",
    )


class StudentService(CrudService):
    """Students: an update only touches guardian/contact details and status."""
    repository_class = repositories.StudentRepository
    entity_name = "Student"
    REFERENCES = {"school_data": (models.SchoolData, "School data")}
    UPDATE_FIELDS = (
        "guardian_first_name",
        "guardian_last_name",
        "guardian_contact_number",
        "guardian_email",
        "contact_number",
        "email",
        "status",
    )


class TeacherService(CrudService):
    """Teachers: an update never changes `subjects` or `lessons`."""
    repository_class = repositories.TeacherRepository
    entity_name = "Teacher"
    REFERENCES = {
        "school_data": (models.SchoolData, "School data"),
        "subjects": (models.Subject, "Subject"),
    }
    UPDATE_FIELDS = (
        "school_data",
        "first_name",
        "last_name",
        "alias",
        "power",
        "mission_history",
        "is_active",
        "email",
        "phone_number",
        "address",
        "qualifications",
        "years_of_experience",
        "department",
    )


class SubjectService(CrudService):
    repository_class = repositories.SubjectRepository
    entity_name = "Subject"
    REFERENCES = {"school_data": (models.SchoolData, "School data")}
    UPDATE_FIELDS = ("name", "school_data")


class LessonService(CrudService):
    repository_class = repositories.LessonRepository
    entity_name = "Lesson"
    REFERENCES = {
        "subject": (models.Subject, "Subject"),
        "teacher": (models.Teacher, "Teacher"),
        "students": (models.Student, "Student"),
    }
    UPDATE_FIELDS = ("subject", "teacher", "start_time", "end_time", "students")


class FacilityService(CrudService):
    repository_class = repositories.FacilityRepository
    entity_name = "Facility"
    REFERENCES = {"school_data": (models.SchoolData, "School data")}
    UPDATE_FIELDS = (
        "name",
        "type",
        "description",
        "accessible",
        "location_within_campus",
        "capacity",
        "operational",
        "school_data",
    )


class AchievementService(CrudService):
    repository_class = repositories.AchievementRepository
    entity_name = "Achievement"
    REFERENCES = {"student": (models.Student, "Student")}
    UPDATE_FIELDS = ("title", "description", "date_awarded", "student", "awarded_by", "category")
