from fastapi.testclient import TestClient
from liftlog.main import app
from liftlog.security import create_access_token
import uuid

client = TestClient(app)

def auth(user_id=None):
    return {"Authorization": f"Bearer {create_access_token(user_id or str(uuid.uuid4()))}"}

def log(H, day, exercise_id, sets):
    r = client.post("/workouts/finish", headers=H, json={
        "name": f"Session {day}",
        "date_performed": day,
        "exercises": [{"exercise_id": exercise_id, "sets": sets}, {"exercise_id": "other", "sets": []}],
    })
    assert r.status_code == 201, r.text
    return r.json()["workout"]["workout_id"]

def test_history_most_recent_first_sets_in_order():
    exercise = f"ohp-{uuid.uuid4().hex[:6]}"
    H = auth()
    older = log(H, "2024-05-01", exercise, [{"weight": 40, "reps": 8}])
    newer = log(H, "2024-05-08", exercise, [{"weight": 45, "reps": 5, "set_order": 2},
                                            {"weight": 42.5, "reps": 6, "set_order": 1}])
    r = client.get(f"/exercises/{exercise}/history", headers=H)
    assert r.status_code == 200
    history = r.json()
    assert [h["workout_id"] for h in history] == [newer, older]
    assert history[0]["date_performed"] == "2024-05-08"
    assert history[0]["name"] == "Session 2024-05-08"
    assert [s["set_order"] for s in history[0]["sets"]] == [1, 2]
    assert history[0]["sets"][0]["weight"] == 42.5

def test_history_excludes_other_users():
    exercise = f"row-{uuid.uuid4().hex[:6]}"
    log(auth(), "2024-05-01", exercise, [{"weight": 70, "reps": 10}])
    H = auth()
    assert client.get(f"/exercises/{exercise}/history", headers=H).json() == []
    mine = log(H, "2024-05-02", exercise, [{"weight": 60, "reps": 10}])
    history = client.get(f"/exercises/{exercise}/history", headers=H).json()
    assert [h["workout_id"] for h in history] == [mine]

def test_history_skips_instances_without_sets():
    exercise = f"curl-{uuid.uuid4().hex[:6]}"
    H = auth()
    log(H, "2024-05-01", exercise, [])
    assert client.get(f"/exercises/{exercise}/history", headers=H).json() == []

def test_history_requires_auth():
    assert client.get("/exercises/anything/history").status_code == 401

def test_weekly_counts_buckets_end_today():
    from datetime import date
    from liftlog.db import SessionLocal
    from liftlog.services.assembler import weekly_counts

    caller = str(uuid.uuid4())
    H = auth(caller)
    for day in ("2024-05-11", "2024-05-12", "2024-05-18", "2024-05-19", "2024-06-30", "2024-07-01"):
        log(H, day, "squat", [{"weight": 100, "reps": 5}])

    with SessionLocal() as db:
        result = weekly_counts(db, caller, today=date(2024, 6, 30))
    assert result.weeks[0] == date(2024, 5, 12)
    assert result.weeks[-1] == date(2024, 6, 30)
    assert result.counts == [2, 1, 0, 0, 0, 0, 0, 1]

def test_history_same_day_latest_logged_first():
    from datetime import datetime
    from liftlog.db import SessionLocal
    from liftlog.repositories.workout_repo import WorkoutRepository

    exercise = f"dl-{uuid.uuid4().hex[:6]}"
    H = auth()
    morning = log(H, "2024-06-01", exercise, [{"weight": 140, "reps": 3}])
    evening = log(H, "2024-06-01", exercise, [{"weight": 150, "reps": 1}])
    with SessionLocal() as db:
        repo = WorkoutRepository(db)
        repo.upsert(evening, {"created_at": datetime(2024, 6, 1, 18, 0)})
        repo.upsert(morning, {"created_at": datetime(2024, 6, 1, 7, 0)})

    for _ in range(3):
        history = client.get(f"/exercises/{exercise}/history", headers=H).json()
        assert [h["workout_id"] for h in history] == [evening, morning]
