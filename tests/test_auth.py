from datetime import datetime, timedelta

from conftest import login
from models.login_log import LoginLog
from models.session import UserSession
from models.users import User


def test_admin_login_returns_role_and_sets_cookie(anonymous_client):
    response = login(anonymous_client, "admin@portal.com", "admin123")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["role"] == "admin"
    assert body["user"]["email"] == "admin@portal.com"
    assert body["user"]["firstName"] == "Admin"
    assert "portal_session" in response.cookies

    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "max-age=86400" in set_cookie


def test_login_is_case_insensitive_on_email(anonymous_client):
    response = login(anonymous_client, "Agent@Portal.com", "agent123")
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "moderator"


def test_wrong_password_is_rejected(anonymous_client):
    response = login(anonymous_client, "admin@portal.com", "wrong-password")

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid email or password"}


def test_unknown_email_is_rejected(anonymous_client):
    response = login(anonymous_client, "nobody@portal.com", "whatever")

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_deactivated_account_cannot_login_with_correct_password(anonymous_client):
    response = login(anonymous_client, "khay@portal.com", "khay123")

    assert response.status_code == 401
    assert response.json()["message"] == "Account is deactivated"


def test_deactivated_account_with_wrong_password_reports_bad_credentials(anonymous_client):
    response = login(anonymous_client, "khay@portal.com", "nope")
    assert response.json()["message"] == "Invalid email or password"


def test_malformed_login_payload_is_a_validation_error(anonymous_client):
    response = anonymous_client.post("/api/auth/login", json={"email": "not-an-email"})

    assert response.status_code == 400
    body = response.json()
    assert len(body["errors"]) == 2
    assert "password is required" in body["errors"]
    assert body["message"] == body["errors"][0]


def test_current_user_requires_session(anonymous_client):
    response = anonymous_client.get("/api/auth/user")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_current_user_returns_summary(moderator_client):
    response = moderator_client.get("/api/auth/user")

    assert response.status_code == 200
    assert response.json() == {
        "id": response.json()["id"],
        "email": "agent@portal.com",
        "firstName": "Agent",
        "lastName": "Smith",
        "role": "moderator",
    }


def test_forged_cookie_is_rejected(anonymous_client):
    anonymous_client.cookies.set("portal_session", "not-a-token")
    assert anonymous_client.get("/api/auth/user").status_code == 401


def test_logout_destroys_session(moderator_client, db_session):
    response = moderator_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}

    assert moderator_client.get("/api/auth/user").status_code == 401
    assert moderator_client.get("/api/attendance/today").status_code == 401

    session = db_session.query(UserSession).one()
    assert session.revoked_at is not None


def test_reusing_a_revoked_cookie_fails(make_client):
    client = make_client()
    login(client, "agent@portal.com", "agent123")
    token = client.cookies.get("portal_session")
    client.post("/api/auth/logout")

    replay = make_client()
    replay.cookies.set("portal_session", token)
    assert replay.get("/api/auth/user").status_code == 401


def test_expired_session_is_rejected(moderator_client, db_session):
    session = db_session.query(UserSession).one()
    session.expires_at = datetime.now() - timedelta(seconds=1)
    db_session.commit()

    assert moderator_client.get("/api/auth/user").status_code == 401


def test_session_lifetime_is_fixed_at_24_hours(moderator_client, db_session):
    session = db_session.query(UserSession).one()
    assert session.expires_at - session.created_at == timedelta(hours=24)

    moderator_client.get("/api/auth/user")
    db_session.refresh(session)
    assert session.expires_at - session.created_at == timedelta(hours=24)


def test_login_purges_expired_sessions(make_client, db_session):
    first = make_client()
    login(first, "agent@portal.com", "agent123")
    stale = db_session.query(UserSession).one()
    stale_sid = stale.session_id
    stale.expires_at = datetime.now() - timedelta(hours=1)
    db_session.commit()

    login(make_client(), "zeno@portal.com", "zeno123")

    db_session.expire_all()
    sessions = db_session.query(UserSession).all()
    assert len(sessions) == 1
    assert sessions[0].session_id != stale_sid


def test_current_user_vanished_returns_404(moderator_client, db_session):
    user = db_session.query(User).filter(User.email == "agent@portal.com").one()
    db_session.query(UserSession).filter(UserSession.user_id == user.id).update(
        {UserSession.user_id: 9999}, synchronize_session=False
    )
    db_session.commit()

    response = moderator_client.get("/api/auth/user")
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_session_of_vanished_user_cannot_reach_other_routes(moderator_client, db_session):
    db_session.query(UserSession).update({UserSession.user_id: 9999}, synchronize_session=False)
    db_session.commit()

    response = moderator_client.get("/api/attendance/today")
    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}
    assert moderator_client.post("/api/attendance/mark").status_code == 401


def test_track_login_appends_entry(moderator_client, db_session):
    response = moderator_client.post(
        "/api/auth/track-login",
        headers={"X-Forwarded-For": "192.168.1.20, 10.0.0.1", "User-Agent": "pytest-agent"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}

    entry = db_session.query(LoginLog).one()
    assert entry.ip_address == "192.168.1.20"
    assert entry.location == "Local Network"
    assert entry.user_agent == "pytest-agent"
    assert entry.logout_time is None


def test_logout_closes_open_login_entries_once(make_client, db_session):
    client = make_client()
    login(client, "agent@portal.com", "agent123")
    client.post("/api/auth/track-login")
    client.post("/api/auth/logout-track")

    closed = db_session.query(LoginLog).one()
    first_logout = closed.logout_time
    assert first_logout is not None

    client.post("/api/auth/track-login")
    client.post("/api/auth/logout")

    db_session.expire_all()
    entries = db_session.query(LoginLog).order_by(LoginLog.id).all()
    assert len(entries) == 2
    assert entries[0].logout_time == first_logout
    assert entries[1].logout_time is not None


def test_login_history_newest_first(moderator_client):
    for _ in range(3):
        moderator_client.post("/api/auth/track-login")

    response = moderator_client.get("/api/auth/login-history", params={"limit": 2})

    assert response.status_code == 200
    history = response.json()["history"]
    assert len(history) == 2
    assert history[0]["id"] > history[1]["id"]
    assert "loginTime" in history[0]
