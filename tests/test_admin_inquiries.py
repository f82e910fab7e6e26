"""Inquiry console routes and JSON API."""
import json
from io import BytesIO

import openpyxl
from sqlalchemy.exc import OperationalError

from models import Inquiry, db


def _headers():
    return {"Content-Type": "application/json"}


def _seed(flask_app):
    with flask_app.app_context():
        rows = [
            Inquiry(name="Dr. Aris Varma", email="a.varma@citygeneral.com", company="City General Hospital",
                    message="[Product: XT-Series] [Interest: Laboratory & Diagnostics] - Fleet of 5 analyzers",
                    status="pending"),
            Inquiry(name="Sarah Chen", email="schen@alphadiag.org", company="Alpha Diagnostics",
                    message="[Product: DRX-900] [Interest: Imaging & Radiology] - Technical dossier please",
                    status="reviewed"),
            Inquiry(name="Lee Park", email="lee@acme.org", company="Acme Clinics",
                    message="General question about service contracts", status="pending"),
        ]
        db.session.add_all(rows)
        db.session.commit()
        return [r.id for r in rows]


def test_console_lists_annotated_inquiries(admin_client, flask_app):
    _seed(flask_app)
    resp = admin_client.get("/admin/inquiries")
    body = resp.data.decode("utf-8")
    assert resp.status_code == 200
    assert "Inquiry Flow" in body
    assert "Fleet of 5 analyzers" in body
    assert "DRX-900" in body


def test_console_filters_by_status_and_product(admin_client, flask_app):
    _seed(flask_app)
    resp = admin_client.get("/admin/inquiries?status=pending&product=XT-Series")
    body = resp.data.decode("utf-8")
    assert "Dr. Aris Varma" in body
    assert "Sarah Chen" not in body
    assert "Lee Park" not in body


def test_console_search(admin_client, flask_app):
    _seed(flask_app)
    body = admin_client.get("/admin/inquiries?q=acme").data.decode("utf-8")
    assert "Lee Park" in body
    assert "Dr. Aris Varma" not in body


def test_status_form_persists_and_rerenders(admin_client, flask_app):
    ids = _seed(flask_app)
    resp = admin_client.post(f"/admin/inquiries/{ids[0]}/status",
                             data={"new_status": "archived", "status": "pending"})
    body = resp.data.decode("utf-8")
    assert resp.status_code == 200
    assert "Inquiry marked as archived." in body
    # archived record drops out of the pending view
    assert "Dr. Aris Varma" not in body
    assert "Lee Park" in body
    with flask_app.app_context():
        assert db.session.get(Inquiry, ids[0]).status == "archived"


def test_status_form_invalid_status(admin_client, flask_app):
    ids = _seed(flask_app)
    resp = admin_client.post(f"/admin/inquiries/{ids[0]}/status", data={"new_status": "deleted"})
    assert resp.status_code == 400
    with flask_app.app_context():
        assert db.session.get(Inquiry, ids[0]).status == "pending"


def test_status_form_unknown_inquiry(admin_client, flask_app):
    resp = admin_client.post("/admin/inquiries/999/status", data={"new_status": "reviewed"})
    assert resp.status_code == 404


def test_status_form_persistence_failure_keeps_view(admin_client, flask_app, monkeypatch):
    ids = _seed(flask_app)

    def broken_commit():
        raise OperationalError("UPDATE inquiries", {}, Exception("database is locked"))

    monkeypatch.setattr(db.session, "commit", broken_commit)
    resp = admin_client.post(f"/admin/inquiries/{ids[0]}/status",
                             data={"new_status": "archived", "status": "pending"})
    monkeypatch.undo()

    body = resp.data.decode("utf-8")
    assert resp.status_code == 503
    assert "Status could not be saved" in body
    assert "Dr. Aris Varma" in body


def test_api_update_status(admin_client, flask_app):
    ids = _seed(flask_app)
    resp = admin_client.post(f"/api/inquiries/{ids[1]}/status",
                             data=json.dumps({"status": "archived"}), headers=_headers())
    data = resp.get_json()
    assert resp.status_code == 200
    assert data["success"] is True
    assert data["inquiry"]["status"] == "archived"
    assert data["inquiry"]["target_product"] == "DRX-900"
    assert data["inquiry"]["clean_message"] == "- Technical dossier please"


def test_api_update_status_invalid(admin_client, flask_app):
    ids = _seed(flask_app)
    resp = admin_client.post(f"/api/inquiries/{ids[1]}/status",
                             data=json.dumps({"status": "closed"}), headers=_headers())
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_api_list_with_product_options(admin_client, flask_app):
    _seed(flask_app)
    data = admin_client.get("/api/inquiries?status=pending").get_json()
    assert [i["name"] for i in data["inquiries"]] == ["Lee Park", "Dr. Aris Varma"]
    assert sorted(data["product_options"]) == ["DRX-900", "XT-Series"]
    assert data["status_counts"] == {"pending": 2, "reviewed": 1, "archived": 0}


def test_api_requires_admin(client, flask_app):
    resp = client.post("/api/inquiries/1/status", data=json.dumps({"status": "reviewed"}), headers=_headers())
    assert resp.status_code == 401


def test_excel_export_filtered(admin_client, flask_app):
    _seed(flask_app)
    resp = admin_client.get("/admin/inquiries/excel?status=reviewed")
    assert resp.status_code == 200
    wb = openpyxl.load_workbook(BytesIO(resp.data))
    ws = wb.active
    assert ws.cell(row=1, column=2).value == "Name"
    assert ws.cell(row=2, column=2).value == "Sarah Chen"
    assert ws.max_row == 2


def test_api_update_status_rejects_non_object_body(admin_client, flask_app):
    ids = _seed(flask_app)
    resp = admin_client.post(f"/api/inquiries/{ids[0]}/status",
                             data=json.dumps(["archived"]), headers=_headers())
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False

    with flask_app.app_context():
        assert db.session.get(Inquiry, ids[0]).status == "pending"
