"""
End-to-end workflow integration tests.

A contractor signs up, tracks a project with payroll and material costs,
quotes a new job, reviews the dashboard and downloads the year-end export.
"""

import datetime as dt
import json

from sqlalchemy import inspect

from expense_tracker.db.session import reset_engine
from expense_tracker.writers.csv_export import BOM


def authorize(client, email="crew@example.com", password="hammer123"):
    response = client.post(
        "/api/auth/register", json={"email": email, "password": password, "name": "Crew"}
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


class TestEndToEndWorkflow:
    """Test the complete business workflow over HTTP."""

    def test_lifespan_creates_tables(self, file_engine, database_file):
        assert database_file.exists()
        assert {"users", "projects", "expenses", "employees", "estimates"} <= set(
            inspect(file_engine).get_table_names()
        )

    def test_full_workflow(self, live_client):
        client = live_client
        headers = authorize(client)

        employee = client.post(
            "/api/users/employees", json={"name": "Ana"}, headers=headers
        ).json()
        project = client.post(
            "/api/projects",
            json={
                "name": "Bathroom remodel",
                "grossIncome": 20000,
                "profitSharingEnabled": True,
                "profitSharingType": "three-way",
                "profitShares": [
                    {"name": "A", "percentage": 50},
                    {"name": "B", "percentage": 30},
                    {"name": "C", "percentage": 20},
                ],
            },
            headers=headers,
        ).json()

        for body in [
            {
                "type": "payroll",
                "employeeId": employee["id"],
                "category": "Labor",
                "amount": 6000,
                "daysWorked": 10,
                "weekStart": "2024-05-06",
            },
            {"type": "material", "category": "Tile", "amount": 3000, "returnAmount": 500},
            {"type": "operating", "category": "Dumpster", "amount": 500},
        ]:
            response = client.post(
                "/api/expenses", json={**body, "projectId": project["id"]}, headers=headers
            )
            assert response.status_code == 201

        summary = client.get(
            f"/api/projects/{project['id']}/summary", headers=headers
        ).json()
        assert summary["totalExpenses"] == 9000
        assert summary["adminFee"] == 450
        assert summary["netProfit"] == 10550
        assert [s["amount"] for s in summary["shares"]] == [5275, 3165, 2110]

        estimate = client.post(
            "/api/estimates",
            json={
                "customerName": "Next Client",
                "projectTitle": "Deck",
                "taxRate": 0,
                "items": [{"description": "Deck boards", "amount": 10, "unitPrice": 45.5}],
            },
            headers=headers,
        ).json()
        assert estimate["total"] == 455
        pdf = client.get(f"/api/estimates/{estimate['id']}/pdf", headers=headers)
        assert pdf.content.startswith(b"%PDF-")

        metrics = client.get("/api/dashboard", headers=headers).json()
        assert metrics["netProfit"] == 11000
        assert metrics["expenseCount"] == 3

        year = dt.datetime.now(dt.timezone.utc).year
        export = client.get(
            "/api/export/all", params={"format": "csv", "year": year}, headers=headers
        )
        text = export.content.decode("utf-8")
        assert text.startswith(BOM)
        assert "A: 50%; B: 30%; C: 20%" in text
        assert "payroll,Bathroom remodel,Labor,,6000,Ana,10,0,2024-05-06," in text

        client.delete(f"/api/users/employees/{employee['id']}", headers=headers)
        payroll = client.get(
            "/api/expenses", params={"type": "payroll"}, headers=headers
        ).json()
        assert payroll[0]["employeeId"] is None

        client.delete(f"/api/projects/{project['id']}", headers=headers)
        assert client.get("/api/expenses", headers=headers).json() == []

    def test_accounts_are_isolated(self, live_client):
        client = live_client
        owner = authorize(client, "owner@example.com")
        intruder = authorize(client, "intruder@example.com")

        project = client.post(
            "/api/projects", json={"name": "Private"}, headers=owner
        ).json()

        assert client.get("/api/projects", headers=intruder).json() == []
        for method, path in [
            ("get", f"/api/projects/{project['id']}"),
            ("put", f"/api/projects/{project['id']}"),
            ("delete", f"/api/projects/{project['id']}"),
        ]:
            kwargs = {"json": {"name": "Mine"}} if method == "put" else {}
            response = getattr(client, method)(path, headers=intruder, **kwargs)
            assert response.status_code == 404

        export = client.get("/api/export/all", headers=intruder)
        assert json.loads(export.content)["projects"] == []

    def test_estimate_numbers_survive_restart(self, live_client, database_file):
        """Numbers continue from the stored estimates after reconnecting."""
        client = live_client
        headers = authorize(client)
        for _ in range(3):
            client.post(
                "/api/estimates",
                json={"customerName": "C", "projectTitle": "P"},
                headers=headers,
            )

        reset_engine()
        estimate = client.post(
            "/api/estimates",
            json={"customerName": "C", "projectTitle": "P"},
            headers=headers,
        ).json()
        assert estimate["estimateNumber"] == "EST-0004"
