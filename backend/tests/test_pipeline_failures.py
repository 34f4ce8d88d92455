"""
Writes are separate single-table commits. These tests break one step or
interleave a second writer and check what is left behind.
"""
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
import uuid

from liftlog.main import app
from liftlog.security import create_access_token
from liftlog.db import SessionLocal
from liftlog.repositories.set_repo import SetRepository
from liftlog.repositories.template_repo import TemplateExerciseRepository, TemplateRepository
from liftlog.repositories.workout_repo import WorkoutExerciseRepository, WorkoutRepository
from liftlog.schemas.template import TemplateCreate, TemplateUpdate
from liftlog.services import pipeline

client = TestClient(app)

def auth(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}

def failing_step(self, rows, **filters):
    with self.step(f"insert {self.table}"):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

def template_children(template_id):
    with SessionLocal() as db:
        rows = TemplateExerciseRepository(db).find(template_id=template_id, order_by="exercise_order")
        return [te.exercise_id for te in rows]

def workout_counts(workout_id):
    with SessionLocal() as db:
        return (
            len(WorkoutExerciseRepository(db).find(workout_id=workout_id)),
            len(SetRepository(db).find(workout_id=workout_id)),
        )

def test_template_child_insert_failure_names_step(monkeypatch):
    uid = str(uuid.uuid4())
    tid = str(uuid.uuid4())
    payload = {"template_id": tid, "name": "Pull", "exercises": [{"exercise_id": "row"}, {"exercise_id": "chin"}]}

    monkeypatch.setattr(TemplateExerciseRepository, "replace_where", failing_step)
    r = client.post("/templates/create", headers=auth(uid), json=payload)
    assert r.status_code == 500
    assert r.json()["step"] == "insert template_exercises"

    # the parent landed, its children did not
    with SessionLocal() as db:
        assert TemplateRepository(db).get(tid).created_by == uid
    assert template_children(tid) == []

    monkeypatch.undo()
    r = client.post("/templates/create", headers=auth(uid), json=payload)
    assert r.status_code == 201
    assert template_children(tid) == ["row", "chin"]

def test_set_insert_failure_leaves_partial_workout_and_retry_converges(monkeypatch):
    uid = str(uuid.uuid4())
    wid = str(uuid.uuid4())
    payload = {
        "workout_id": wid,
        "name": "Legs",
        "date_performed": "2024-03-03",
        "exercises": [{"exercise_id": "squat", "sets": [{"weight": 100, "reps": 5}, {"weight": 105, "reps": 3}]}],
    }

    monkeypatch.setattr(SetRepository, "replace_where", failing_step)
    r = client.post("/workouts/finish", headers=auth(uid), json=payload)
    assert r.status_code == 500
    assert r.json()["step"] == "insert sets"
    assert workout_counts(wid) == (1, 0)

    monkeypatch.undo()
    for _ in range(2):
        r = client.post("/workouts/finish", headers=auth(uid), json=payload)
        assert r.status_code == 201
    assert workout_counts(wid) == (1, 2)
    with SessionLocal() as db:
        assert WorkoutRepository(db).get(wid).user_id == uid

def test_parent_upsert_failure_writes_nothing(monkeypatch):
    def failing_upsert(self, ident, values, *, preserve=()):
        with self.step(f"upsert {self.table}"):
            raise OperationalError("UPDATE", {}, Exception("locked"))

    tid = str(uuid.uuid4())
    monkeypatch.setattr(TemplateRepository, "upsert", failing_upsert)
    r = client.post("/templates/create", headers=auth(str(uuid.uuid4())),
                    json={"template_id": tid, "name": "Arms", "exercises": [{"exercise_id": "curl"}]})
    assert r.status_code == 500
    assert r.json()["step"] == "upsert workout_templates"
    with SessionLocal() as db:
        assert TemplateRepository(db).get(tid) is None

def test_interleaved_replace_keeps_one_payload(monkeypatch):
    uid = str(uuid.uuid4())
    tid = str(uuid.uuid4())
    with SessionLocal() as db:
        pipeline.save_template(db, uid, TemplateCreate(
            template_id=tid, name="Start", exercises=[{"exercise_id": "start"}],
        ))

    first = TemplateUpdate(name="A", exercises=[{"exercise_id": "a1"}, {"exercise_id": "a2"}])
    second = TemplateUpdate(name="B", exercises=[{"exercise_id": "b1"}, {"exercise_id": "b2"}, {"exercise_id": "b3"}])

    original_delete = TemplateExerciseRepository.delete_where
    ran_second = []

    def delete_then_let_second_writer_finish(self, **filters):
        deleted = original_delete(self, **filters)
        if not ran_second:
            ran_second.append(True)
            with SessionLocal() as other:
                pipeline.update_template(other, uid, tid, second)
        return deleted

    monkeypatch.setattr(TemplateExerciseRepository, "delete_where", delete_then_let_second_writer_finish)
    with SessionLocal() as db:
        result = pipeline.update_template(db, uid, tid, first)

    assert ran_second == [True]
    assert [te.exercise_id for te in result.template_exercises] == ["a1", "a2"]
    assert template_children(tid) == ["a1", "a2"]
