"""Tests for admin dashboard."""

from datetime import date, datetime

from models import Inquiry, Product, db
from routes.dashboard import month_starts, monthly_counts


def test_month_starts_crosses_year():
    starts = month_starts(date(2026, 2, 15), months=4)
    assert starts == [date(2025, 11, 1), date(2025, 12, 1), date(2026, 1, 1), date(2026, 2, 1)]


def test_monthly_counts_ignores_outside_window():
    today = date(2026, 3, 10)
    stamps = [datetime(2026, 3, 1), datetime(2026, 3, 9), datetime(2026, 1, 20),
              datetime(2025, 6, 1), None]
    counts = monthly_counts(stamps, today, months=3)
    assert counts == {"2026-01": 1, "2026-02": 0, "2026-03": 2}


def test_dashboard_requires_admin(client, flask_app):
    resp = client.get("/admin/dashboard", follow_redirects=False)
    assert resp.status_code == 302
    assert "login" in resp.headers.get("Location", "")


def test_dashboard_loads(admin_client, flask_app):
    resp = admin_client.get("/admin/dashboard")
    assert resp.status_code == 200
    assert "Command Nexus" in resp.data.decode("utf-8")


def test_dashboard_with_data(admin_client, flask_app):
    with flask_app.app_context():
        db.session.add(Product(name="Monitor", model_number="M5", slug="monitor-m5",
                               is_published=True, technical_specs={}))
        db.session.add(Inquiry(name="Sarah Chen", email="s@alpha.org", company="Alpha Diagnostics",
                               message="[Product: M5] - quote"))
        db.session.commit()

    body = admin_client.get("/admin/dashboard").data.decode("utf-8")
    assert "Sarah Chen" in body
    assert "M5" in body


def test_stats_api(admin_client, flask_app):
    with flask_app.app_context():
        db.session.add_all([
            Inquiry(name="A", email="a@x.org", company="X", message="m", status="pending"),
            Inquiry(name="B", email="b@x.org", company="X", message="m", status="archived"),
        ])
        db.session.commit()

    data = admin_client.get("/admin/stats").get_json()
    assert data["inquiries"]["total"] == 2
    assert data["inquiries"]["status"] == {"pending": 1, "reviewed": 0, "archived": 1}
    assert data["inquiries"]["monthly"][date.today().strftime("%Y-%m")] == 2
    assert len(data["inquiries"]["monthly"]) == 6
    assert data["catalog"]["products"] == 0
