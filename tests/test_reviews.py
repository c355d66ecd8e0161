from models.admin_action import AdminAction
from models.review import ReviewStatus, TrustpilotReview

REVIEW = {
    "customerName": "Jane Customer",
    "customerEmail": "jane@customer.com",
    "rating": 5,
    "reviewText": "Fast delivery and friendly support.",
    "businessResponse": "Thank you, Jane!",
}


def _submit(client, **overrides):
    return client.post("/api/reviews/submit", json={**REVIEW, **overrides})


def test_submit_creates_pending_review(moderator_client):
    response = _submit(moderator_client)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    review = body["review"]
    assert review["status"] == "pending"
    assert review["customerName"] == "Jane Customer"
    assert review["reviewedAt"] is None
    assert review["adminComments"] is None


def test_submit_validates_rating_range(moderator_client):
    response = _submit(moderator_client, rating=6)

    assert response.status_code == 400
    assert response.json()["message"].startswith("rating:")


def test_submit_rejects_blank_text(moderator_client):
    response = _submit(moderator_client, reviewText="   ")
    assert response.status_code == 400


def test_submit_requires_session(anonymous_client):
    assert _submit(anonymous_client).status_code == 401


def test_my_reviews_lists_only_own_newest_first(make_client):
    from conftest import login

    agent = make_client()
    zeno = make_client()
    login(agent, "agent@portal.com", "agent123")
    login(zeno, "zeno@portal.com", "zeno123")

    first = _submit(agent, customerName="First").json()["review"]
    second = _submit(agent, customerName="Second").json()["review"]
    _submit(zeno, customerName="Other")

    reviews = agent.get("/api/reviews/my-reviews").json()
    assert [r["id"] for r in reviews] == [second["id"], first["id"]]


def test_approve_review_records_decision(moderator_client, admin_client, db_session):
    review_id = _submit(moderator_client).json()["review"]["id"]

    response = admin_client.post(
        f"/api/admin/reviews/{review_id}/review",
        json={"status": "approved", "adminComments": "looks good"},
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}

    fetched = moderator_client.get(f"/api/reviews/{review_id}").json()
    assert fetched["status"] == "approved"
    assert fetched["adminComments"] == "looks good"
    assert fetched["reviewedAt"] is not None

    stored = db_session.query(TrustpilotReview).one()
    assert stored.reviewed_at == stored.updated_at
    assert stored.admin_review_id is not None

    action = db_session.query(AdminAction).one()
    assert action.action == "reviewed_trustpilot_review_approved"
    assert action.details == f"Review ID: {review_id}, Comments: looks good"
    assert action.target_user_id is None


def test_reject_without_comments(moderator_client, admin_client, db_session):
    review_id = _submit(moderator_client).json()["review"]["id"]

    admin_client.post(f"/api/admin/reviews/{review_id}/review", json={"status": "rejected"})

    stored = db_session.query(TrustpilotReview).one()
    assert stored.status == ReviewStatus.REJECTED
    assert db_session.query(AdminAction).one().details == f"Review ID: {review_id}, Comments: None"


def test_review_can_only_be_decided_once(moderator_client, admin_client, db_session):
    review_id = _submit(moderator_client).json()["review"]["id"]
    url = f"/api/admin/reviews/{review_id}/review"

    admin_client.post(url, json={"status": "approved", "adminComments": "ok"})
    first_reviewed_at = db_session.query(TrustpilotReview).one().reviewed_at

    response = admin_client.post(url, json={"status": "rejected", "adminComments": "changed my mind"})
    assert response.status_code == 409
    assert response.json()["message"] == "Review has already been reviewed"

    db_session.expire_all()
    stored = db_session.query(TrustpilotReview).one()
    assert stored.status == ReviewStatus.APPROVED
    assert stored.admin_comments == "ok"
    assert stored.reviewed_at == first_reviewed_at
    assert db_session.query(AdminAction).count() == 1


def test_deciding_unknown_review_is_not_found(admin_client):
    response = admin_client.post("/api/admin/reviews/4242/review", json={"status": "approved"})
    assert response.status_code == 404


def test_pending_is_not_a_valid_decision(moderator_client, admin_client):
    review_id = _submit(moderator_client).json()["review"]["id"]
    response = admin_client.post(f"/api/admin/reviews/{review_id}/review", json={"status": "pending"})
    assert response.status_code == 400


def test_moderator_cannot_decide_reviews(moderator_client):
    review_id = _submit(moderator_client).json()["review"]["id"]
    response = moderator_client.post(f"/api/admin/reviews/{review_id}/review", json={"status": "approved"})
    assert response.status_code == 403


def test_admin_list_filters_by_status(moderator_client, admin_client):
    pending_id = _submit(moderator_client, customerName="Pending").json()["review"]["id"]
    approved_id = _submit(moderator_client, customerName="Approved").json()["review"]["id"]
    admin_client.post(f"/api/admin/reviews/{approved_id}/review", json={"status": "approved"})

    all_reviews = admin_client.get("/api/admin/reviews").json()
    assert [r["id"] for r in all_reviews] == [approved_id, pending_id]

    pending = admin_client.get("/api/admin/reviews", params={"status": "pending"}).json()
    assert [r["id"] for r in pending] == [pending_id]

    bad = admin_client.get("/api/admin/reviews", params={"status": "archived"})
    assert bad.status_code == 400


def test_moderators_cannot_read_each_others_reviews(make_client):
    from conftest import login

    agent = make_client()
    zeno = make_client()
    login(agent, "agent@portal.com", "agent123")
    login(zeno, "zeno@portal.com", "zeno123")
    review_id = _submit(agent).json()["review"]["id"]

    assert zeno.get(f"/api/reviews/{review_id}").status_code == 404
