"""Public RFQ form: validation and tagged message ingestion."""
from models import Inquiry, db
from services.inquiry_service import annotate_inquiry


def _submit(client, **overrides):
    data = {
        "name": "Dr. Aris Varma",
        "email": "a.varma@citygeneral.com",
        "organization": "City General Hospital",
        "interest": "Imaging & Radiology",
        "message": "Need bulk pricing",
        **overrides,
    }
    return client.post("/acquisition", data=data, follow_redirects=True)


def test_form_shows_bound_product(client, flask_app):
    resp = client.get("/acquisition?product=DRX-900")
    assert resp.status_code == 200
    assert "DRX-900" in resp.data.decode("utf-8")


def test_submit_with_product_embeds_tags(client, flask_app):
    resp = _submit(client, product="DRX-900")
    assert resp.status_code == 200
    assert "Your request has been received" in resp.data.decode("utf-8")

    with flask_app.app_context():
        inquiry = Inquiry.query.one()
        assert inquiry.status == "pending"
        assert inquiry.company == "City General Hospital"
        assert inquiry.message == "[Product: DRX-900] [Interest: Imaging & Radiology] - Need bulk pricing"
        record = annotate_inquiry(inquiry)
        assert record["target_product"] == "DRX-900"
        assert record["interest"] == "Imaging & Radiology"


def test_submit_without_product(client, flask_app):
    _submit(client, interest="Dental")
    with flask_app.app_context():
        record = annotate_inquiry(Inquiry.query.one())
        assert record["target_product"] is None
        assert record["interest"] == "Dental"
        assert record["clean_message"] == "Need bulk pricing"


def test_submit_missing_required_rejected(client, flask_app):
    resp = _submit(client, organization="")
    assert "Please fill in your name, email and organization." in resp.data.decode("utf-8")
    with flask_app.app_context():
        assert Inquiry.query.count() == 0


def test_submit_invalid_email_rejected(client, flask_app):
    resp = _submit(client, email="not-an-email")
    assert "valid email" in resp.data.decode("utf-8")
    with flask_app.app_context():
        assert Inquiry.query.count() == 0


def test_submit_unknown_interest_rejected(client, flask_app):
    _submit(client, interest="Spaceships")
    with flask_app.app_context():
        assert Inquiry.query.count() == 0


def test_submit_sends_notification(client, flask_app, monkeypatch):
    sent = []
    monkeypatch.setattr(
        "services.notification_service.NotificationService.send_email",
        staticmethod(lambda subject, body: sent.append((subject, body))),
    )
    _submit(client, product="DRX-900")
    assert len(sent) == 1
    assert "City General Hospital" in sent[0][0]
    assert "DRX-900" in sent[0][1]


def test_submit_strips_brackets_from_product(client, flask_app):
    _submit(client, product="DRX]-900 [Imaging")

    with flask_app.app_context():
        record = annotate_inquiry(Inquiry.query.one())
        assert record["target_product"] == "DRX-900 Imaging"
        assert record["clean_message"] == "- Need bulk pricing"
        assert record["tag_warnings"] == []
