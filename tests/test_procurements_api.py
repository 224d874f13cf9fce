"""
tests/test_procurements_api.py -- integration tests for /procurements.

Covers the full stack: role gate -> request validation -> repository ->
response envelope, against an in-memory database.
"""
import json

import pytest

from conftest import TOMATOES


def _create(client, headers, **overrides):
    body = {**TOMATOES, **overrides}
    return client.post("/procurements", json=body, headers=headers)


class TestProcurementLifecycle:
    def test_create_get_patch_delete(self, client, manager_headers):
        resp = _create(client, manager_headers)
        assert resp.status_code == 201, resp.text
        created = resp.json()["createdRecord"]
        assert created["branch"] == "Maganjo"
        record_id = created["id"]

        resp = client.get(f"/procurements/{record_id}")
        assert resp.status_code == 200
        found = resp.json()["Record"]
        for key, value in TOMATOES.items():
            assert found[key] == value

        resp = client.patch(f"/procurements/{record_id}", json={"sellingPrice": 220000}, headers=manager_headers)
        assert resp.status_code == 200, resp.text
        updated = resp.json()["updatedRecord"]
        assert updated["sellingPrice"] == 220000
        for key, value in TOMATOES.items():
            if key != "sellingPrice":
                assert updated[key] == value

        resp = client.delete(f"/procurements/{record_id}", headers=manager_headers)
        assert resp.status_code == 200
        deleted = resp.json()["deletedRecord"]
        assert deleted["id"] == record_id
        assert deleted["sellingPrice"] == 220000

        resp = client.get(f"/procurements/{record_id}")
        assert resp.status_code == 404

    def test_list_returns_all_records(self, client, manager_headers):
        _create(client, manager_headers)
        _create(client, manager_headers, branch="Matugga", produceName="Beans")
        resp = client.get("/procurements")
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"]
        assert [r["produceName"] for r in body["AllRecords"]] == ["Tomatoes", "Beans"]

    def test_empty_list_is_not_found(self, client):
        resp = client.get("/procurements")
        assert resp.status_code == 404
        assert resp.json()["message"] == "No procurement record found"
        assert resp.json()["details"] == "The procurement collection is empty"

    def test_empty_patch_leaves_record_unchanged(self, client, manager_headers):
        created = _create(client, manager_headers).json()["createdRecord"]
        resp = client.patch(f"/procurements/{created['id']}", json={}, headers=manager_headers)
        assert resp.status_code == 200
        updated = resp.json()["updatedRecord"]
        for key in TOMATOES:
            assert updated[key] == created[key]


class TestProcurementValidation:
    def test_tonnage_below_minimum_is_rejected_and_not_stored(self, client, manager_headers):
        resp = _create(client, manager_headers, tonnage=999)
        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "Validation failed"
        assert any(d["field"] == "tonnage" for d in body["details"])
        assert client.get("/procurements").status_code == 404

    def test_cost_below_minimum_is_rejected(self, client, manager_headers):
        resp = _create(client, manager_headers, cost=9999)
        assert resp.status_code == 400

    def test_branch_is_case_sensitive(self, client, manager_headers):
        resp = _create(client, manager_headers, branch="maganjo")
        assert resp.status_code == 400
        assert any(d["field"] == "branch" for d in resp.json()["details"])

    def test_missing_field_is_named(self, client, manager_headers):
        body = dict(TOMATOES)
        del body["dealerName"]
        resp = client.post("/procurements", json=body, headers=manager_headers)
        assert resp.status_code == 400
        assert any(d["field"] == "dealerName" for d in resp.json()["details"])

    def test_patch_revalidates_supplied_fields(self, client, manager_headers):
        record_id = _create(client, manager_headers).json()["createdRecord"]["id"]
        resp = client.patch(f"/procurements/{record_id}", json={"tonnage": 10}, headers=manager_headers)
        assert resp.status_code == 400
        assert client.get(f"/procurements/{record_id}").json()["Record"]["tonnage"] == 1500

    def test_patch_cannot_null_required_field(self, client, manager_headers):
        record_id = _create(client, manager_headers).json()["createdRecord"]["id"]
        resp = client.patch(f"/procurements/{record_id}", json={"dealerName": None}, headers=manager_headers)
        assert resp.status_code == 400

    def test_malformed_id_is_bad_request(self, client):
        resp = client.get("/procurements/not-an-id")
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid record id"

    def test_unknown_id_is_not_found(self, client, manager_headers):
        resp = client.get("/procurements/4242")
        assert resp.status_code == 404
        assert resp.json() == {
            "message": "Procurement record with id 4242 not found",
            "details": "No procurement has id 4242",
        }
        assert client.patch("/procurements/4242", json={"cost": 20000}, headers=manager_headers).status_code == 404
        assert client.delete("/procurements/4242", headers=manager_headers).status_code == 404

    @pytest.mark.parametrize("token", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_numbers_are_rejected(self, client, manager_headers, token):
        # json.loads accepts these tokens, so they arrive as float values
        raw = json.dumps(TOMATOES).replace('"tonnage": 1500', f'"tonnage": {token}')
        resp = client.post(
            "/procurements",
            content=raw,
            headers={**manager_headers, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert any(d["field"] == "tonnage" for d in resp.json()["details"])
        assert client.get("/procurements").status_code == 404

    def test_nan_selling_price_is_bad_request(self, client, manager_headers):
        raw = json.dumps(TOMATOES).replace('"sellingPrice": 200000', '"sellingPrice": NaN')
        resp = client.post(
            "/procurements",
            content=raw,
            headers={**manager_headers, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert any(d["field"] == "sellingPrice" for d in resp.json()["details"])


class TestProcurementAccess:
    def test_create_requires_token(self, client):
        resp = client.post("/procurements", json=TOMATOES)
        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"

    def test_create_rejects_garbage_token(self, client):
        resp = client.post("/procurements", json=TOMATOES, headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401

    def test_sales_agent_cannot_create(self, client, agent_headers):
        resp = client.post("/procurements", json=TOMATOES, headers=agent_headers)
        assert resp.status_code == 403
        assert resp.json()["message"] == "Manager access required"
        assert resp.json()["details"] == "Role SalesAgent may not perform this operation"

    def test_sales_agent_cannot_patch_or_delete(self, client, manager_headers, agent_headers):
        record_id = _create(client, manager_headers).json()["createdRecord"]["id"]
        assert client.patch(f"/procurements/{record_id}", json={"cost": 20000}, headers=agent_headers).status_code == 403
        assert client.delete(f"/procurements/{record_id}", headers=agent_headers).status_code == 403

    def test_reads_are_public(self, client, manager_headers):
        record_id = _create(client, manager_headers).json()["createdRecord"]["id"]
        assert client.get("/procurements").status_code == 200
        assert client.get(f"/procurements/{record_id}").status_code == 200
