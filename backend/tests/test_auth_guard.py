from fastapi.testclient import TestClient
from jose import jwt
from liftlog.main import app
from liftlog.security import create_access_token
from liftlog.settings import get_settings
import uuid

client = TestClient(app)

def test_missing_token_is_401():
    r = client.get("/workouts")
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"
    assert client.post("/templates/create", json={}).status_code == 401

def test_garbage_token_is_401():
    r = client.get("/templates", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid or expired token"

def test_expired_token_rejected():
    expired = create_access_token(str(uuid.uuid4()), expires_minutes=-1)
    r = client.get("/workouts", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token expired"

def test_wrong_secret_rejected():
    s = get_settings()
    forged = jwt.encode({"sub": "someone", "exp": 4102444800}, "not-the-secret", algorithm=s.ALGORITHM)
    r = client.get("/workouts", headers={"Authorization": f"Bearer {forged}"})
    assert r.status_code == 401

def test_token_without_sub_rejected():
    s = get_settings()
    tok = jwt.encode({"exp": 4102444800}, s.SECRET_KEY, algorithm=s.ALGORITHM)
    r = client.get("/workouts", headers={"Authorization": f"Bearer {tok}"})
    assert r.status_code == 401

def test_valid_token_passes():
    tok = create_access_token(str(uuid.uuid4()), extra={"aud": "authenticated"})
    r = client.get("/workouts", headers={"Authorization": f"Bearer {tok}"})
    assert r.status_code == 200
    assert r.json() == []

def test_exercise_catalogue_is_public():
    assert client.get("/exercises").status_code == 200
