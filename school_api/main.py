"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the mutant school
administration backend. Controllers are intentionally thin: they accept
requests, delegate to services, and map results to status codes.

Every resource collection exposes the same five endpoints:
- POST   /api/<plural>        -> 201 + created body
- GET    /api/<plural>        -> 200 + array
- GET    /api/<plural>/{id}   -> 200 + body, 404 (empty) if absent
- PUT    /api/<plural>/{id}   -> 200 + body, 404 (empty) if absent
- DELETE /api/<plural>/{id}   -> 204, 404 (empty) if deletion fails

Collections: achievements, facilities, lessons, schooldata, students,
subjects, teachers. References to missing rows are rejected with 400.
"""

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
import json
import logging
import time
import uuid
from typing import List
from .database import create_db_and_tables, get_session
from . import services, schemas
from .config import settings

app = FastAPI(title="Mutant School Administration API")
logger = logging.getLogger("school_api.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# Wide-open CORS keeps local browser frontends working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


def _request_log_line(request: Request, req_id: str, started: float, status_code=None) -> str:
    """Render the JSON payload of one `/api` request log line."""
    payload = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
        "client": request.client.host if request.client else "unknown",
    }
    if status_code is not None:
        payload["status_code"] = status_code
    return json.dumps(payload, ensure_ascii=True)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    logged = request.url.path.startswith("/api")
    try:
        response = await call_next(request)
    except Exception:
        if logged:
            logger.exception("request_failed %s", _request_log_line(request, req_id, started))
        raise
    response.headers["X-Request-ID"] = req_id
    if logged:
        logger.info("request_done %s", _request_log_line(request, req_id, started, response.status_code))
    return response


def _not_found() -> Response:
    return Response(status_code=404)


def _delete(svc: services.CrudService, entity_id: int) -> Response:
    """Delete through `svc`; any failure is reported as 404."""
    try:
        svc.delete(entity_id)
    except Exception:
        logger.exception("delete_failed %s id=%s", svc.entity_name, entity_id)
        return _not_found()
    return Response(status_code=204)


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}


# --- school data -----------------------------------------------------------

@app.post('/api/schooldata', response_model=schemas.SchoolDataOut, status_code=201)
def create_school_data(payload: schemas.SchoolDataIn, db: Session = Depends(get_session)):
    """Create a school record."""
    school = services.SchoolDataService(db).create(payload)
    return schemas.SchoolDataOut.model_validate(school)


@app.get('/api/schooldata', response_model=List[schemas.SchoolDataOut])
def list_school_data(db: Session = Depends(get_session)):
    return [schemas.SchoolDataOut.model_validate(s) for s in services.SchoolDataService(db).list_all()]


@app.get('/api/schooldata/{school_id}', response_model=schemas.SchoolDataOut)
def get_school_data(school_id: int, db: Session = Depends(get_session)):
    school = services.SchoolDataService(db).get_by_id(school_id)
    if school is None:
        return _not_found()
    return schemas.SchoolDataOut.model_validate(school)


@app.put('/api/schooldata/{school_id}', response_model=schemas.SchoolDataOut)
def update_school_data(school_id: int, payload: schemas.SchoolDataIn, db: Session = Depends(get_session)):
    """Overwrite the school's own fields.

    Students, teachers, subjects and facilities are attached from their
    side (their `schoolData` reference) and are not touched here.
    """
    try:
        school = services.SchoolDataService(db).update(school_id, payload)
    except services.NotFoundError:
        return _not_found()
    return schemas.SchoolDataOut.model_validate(school)


@app.delete('/api/schooldata/{school_id}', status_code=204)
def delete_school_data(school_id: int, db: Session = Depends(get_session)):
    """Delete a school together with everything it owns."""
    return _delete(services.SchoolDataService(db), school_id)


# --- students --------------------------------------------------------------

@app.post('/api/students', response_model=schemas.StudentOut, status_code=201)
def create_student(payload: schemas.StudentIn, db: Session = Depends(get_session)):
    try:
        student = services.StudentService(db).create(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.StudentOut.model_validate(student)


@app.get('/api/students', response_model=List[schemas.StudentOut])
def list_students(db: Session = Depends(get_session)):
    return [schemas.StudentOut.model_validate(s) for s in services.StudentService(db).list_all()]


@app.get('/api/students/{student_id}', response_model=schemas.StudentOut)
def get_student(student_id: int, db: Session = Depends(get_session)):
    student = services.StudentService(db).get_by_id(student_id)
    if student is None:
        return _not_found()
    return schemas.StudentOut.model_validate(student)


@app.put('/api/students/{student_id}', response_model=schemas.StudentOut)
def update_student(student_id: int, payload: schemas.StudentIn, db: Session = Depends(get_session)):
    """Update a student's guardian/contact details and enrollment status.

    Name, power, mission history, active flag and school are kept as
    stored regardless of the payload.
    """
    try:
        student = services.StudentService(db).update(student_id, payload)
    except services.NotFoundError:
        return _not_found()
    return schemas.StudentOut.model_validate(student)


@app.delete('/api/students/{student_id}', status_code=204)
def delete_student(student_id: int, db: Session = Depends(get_session)):
    return _delete(services.StudentService(db), student_id)


# --- teachers --------------------------------------------------------------

@app.post('/api/teachers', response_model=schemas.TeacherOut, status_code=201)
def create_teacher(payload: schemas.TeacherIn, db: Session = Depends(get_session)):
    """Create a teacher, optionally qualified for existing subjects."""
    try:
        teacher = services.TeacherService(db).create(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.TeacherOut.model_validate(teacher)


@app.get('/api/teachers', response_model=List[schemas.TeacherOut])
def list_teachers(db: Session = Depends(get_session)):
    return [schemas.TeacherOut.model_validate(t) for t in services.TeacherService(db).list_all()]


@app.get('/api/teachers/{teacher_id}', response_model=schemas.TeacherOut)
def get_teacher(teacher_id: int, db: Session = Depends(get_session)):
    teacher = services.TeacherService(db).get_by_id(teacher_id)
    if teacher is None:
        return _not_found()
    return schemas.TeacherOut.model_validate(teacher)


@app.put('/api/teachers/{teacher_id}', response_model=schemas.TeacherOut)
def update_teacher(teacher_id: int, payload: schemas.TeacherIn, db: Session = Depends(get_session)):
    """Update a teacher. The `subjects` in the payload are ignored."""
    try:
        teacher = services.TeacherService(db).update(teacher_id, payload)
    except services.NotFoundError:
        return _not_found()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.TeacherOut.model_validate(teacher)


@app.delete('/api/teachers/{teacher_id}', status_code=204)
def delete_teacher(teacher_id: int, db: Session = Depends(get_session)):
    return _delete(services.TeacherService(db), teacher_id)


# --- subjects --------------------------------------------------------------

@app.post('/api/subjects', response_model=schemas.SubjectOut, status_code=201)
def create_subject(payload: schemas.SubjectIn, db: Session = Depends(get_session)):
    try:
        subject = services.SubjectService(db).create(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.SubjectOut.model_validate(subject)


@app.get('/api/subjects', response_model=List[schemas.SubjectOut])
def list_subjects(db: Session = Depends(get_session)):
    return [schemas.SubjectOut.model_validate(s) for s in services.SubjectService(db).list_all()]


@app.get('/api/subjects/{subject_id}', response_model=schemas.SubjectOut)
def get_subject(subject_id: int, db: Session = Depends(get_session)):
    subject = services.SubjectService(db).get_by_id(subject_id)
    if subject is None:
        return _not_found()
    return schemas.SubjectOut.model_validate(subject)


@app.put('/api/subjects/{subject_id}', response_model=schemas.SubjectOut)
def update_subject(subject_id: int, payload: schemas.SubjectIn, db: Session = Depends(get_session)):
    try:
        subject = services.SubjectService(db).update(subject_id, payload)
    except services.NotFoundError:
        return _not_found()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.SubjectOut.model_validate(subject)


@app.delete('/api/subjects/{subject_id}', status_code=204)
def delete_subject(subject_id: int, db: Session = Depends(get_session)):
    return _delete(services.SubjectService(db), subject_id)


# --- lessons ---------------------------------------------------------------

@app.post('/api/lessons', response_model=schemas.LessonOut, status_code=201)
def create_lesson(payload: schemas.LessonIn, db: Session = Depends(get_session)):
    """Schedule a lesson for a subject, a teacher and a list of students."""
    try:
        lesson = services.LessonService(db).create(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.LessonOut.model_validate(lesson)


@app.get('/api/lessons', response_model=List[schemas.LessonOut])
def list_lessons(db: Session = Depends(get_session)):
    return [schemas.LessonOut.model_validate(lesson) for lesson in services.LessonService(db).list_all()]


@app.get('/api/lessons/{lesson_id}', response_model=schemas.LessonOut)
def get_lesson(lesson_id: int, db: Session = Depends(get_session)):
    lesson = services.LessonService(db).get_by_id(lesson_id)
    if lesson is None:
        return _not_found()
    return schemas.LessonOut.model_validate(lesson)


@app.put('/api/lessons/{lesson_id}', response_model=schemas.LessonOut)
def update_lesson(lesson_id: int, payload: schemas.LessonIn, db: Session = Depends(get_session)):
    """Reschedule a lesson; the student list is replaced wholesale."""
    try:
        lesson = services.LessonService(db).update(lesson_id, payload)
    except services.NotFoundError:
        return _not_found()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.LessonOut.model_validate(lesson)


@app.delete('/api/lessons/{lesson_id}', status_code=204)
def delete_lesson(lesson_id: int, db: Session = Depends(get_session)):
    return _delete(services.LessonService(db), lesson_id)


# --- facilities ------------------------------------------------------------

@app.post('/api/facilities', response_model=schemas.FacilityOut, status_code=201)
def create_facility(payload: schemas.FacilityIn, db: Session = Depends(get_session)):
    try:
        facility = services.FacilityService(db).create(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.FacilityOut.model_validate(facility)


@app.get('/api/facilities', response_model=List[schemas.FacilityOut])
def list_facilities(db: Session = Depends(get_session)):
    return [schemas.FacilityOut.model_validate(f) for f in services.FacilityService(db).list_all()]


@app.get('/api/facilities/{facility_id}', response_model=schemas.FacilityOut)
def get_facility(facility_id: int, db: Session = Depends(get_session)):
    facility = services.FacilityService(db).get_by_id(facility_id)
    if facility is None:
        return _not_found()
    return schemas.FacilityOut.model_validate(facility)


@app.put('/api/facilities/{facility_id}', response_model=schemas.FacilityOut)
def update_facility(facility_id: int, payload: schemas.FacilityIn, db: Session = Depends(get_session)):
    try:
        facility = services.FacilityService(db).update(facility_id, payload)
    except services.NotFoundError:
        return _not_found()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.FacilityOut.model_validate(facility)


@app.delete('/api/facilities/{facility_id}', status_code=204)
def delete_facility(facility_id: int, db: Session = Depends(get_session)):
    return _delete(services.FacilityService(db), facility_id)


# --- achievements ----------------------------------------------------------

@app.post('/api/achievements', response_model=schemas.AchievementOut, status_code=201)
def create_achievement(payload: schemas.AchievementIn, db: Session = Depends(get_session)):
    try:
        achievement = services.AchievementService(db).create(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.AchievementOut.model_validate(achievement)


@app.get('/api/achievements', response_model=List[schemas.AchievementOut])
def list_achievements(db: Session = Depends(get_session)):
    return [schemas.AchievementOut.model_validate(a) for a in services.AchievementService(db).list_all()]


@app.get('/api/achievements/{achievement_id}', response_model=schemas.AchievementOut)
def get_achievement(achievement_id: int, db: Session = Depends(get_session)):
    achievement = services.AchievementService(db).get_by_id(achievement_id)
    if achievement is None:
        return _not_found()
    return schemas.AchievementOut.model_validate(achievement)


@app.put('/api/achievements/{achievement_id}', response_model=schemas.AchievementOut)
def update_achievement(achievement_id: int, payload: schemas.AchievementIn, db: Session = Depends(get_session)):
    try:
        achievement = services.AchievementService(db).update(achievement_id, payload)
    except services.NotFoundError:
        return _not_found()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schemas.AchievementOut.model_validate(achievement)


@app.delete('/api/achievements/{achievement_id}', status_code=204)
def delete_achievement(achievement_id: int, db: Session = Depends(get_session)):
    return _delete(services.AchievementService(db), achievement_id)
