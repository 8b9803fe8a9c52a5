"""
Tests for the /artisans endpoints.

Requêtes HTTP réelles (TestClient) sur une base SQLite temporaire.
Valide les statuts, les corps de réponse et le contrat d’erreurs {"error": ...}.
"""

import pytest

NON_NUMERIC_IDS = ["abc", "12abc", "NaN", "1-2", "--1"]


class TestListArtisans:
    """Tests for GET /artisans."""

    def test_empty_table_returns_empty_array(self, client) -> None:
        response = client.get("/artisans")
        assert response.status_code == 200
        assert response.json() == []

    def test_returns_all_rows(self, client) -> None:
        client.post("/artisans", json={"nom": "Fatima", "profession": "Potter"})
        client.post("/artisans", json={"nom": "Omar", "profession": "Menuisier", "note": 4.0})

        response = client.get("/artisans")
        assert response.status_code == 200
        assert [a["nom"] for a in response.json()] == ["Fatima", "Omar"]

    def test_storage_error_returns_generic_500(self, client, broken_db) -> None:
        response = client.get("/artisans")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to retrieve artisans"}
        assert "closed the connection" not in response.text


class TestGetArtisan:
    """Tests for GET /artisans/{id}."""

    def test_existing_artisan(self, client, fatima) -> None:
        response = client.get(f"/artisans/{fatima['id']}")
        assert response.status_code == 200
        assert response.json() == fatima

    def test_missing_artisan_returns_404(self, client) -> None:
        response = client.get("/artisans/999")
        assert response.status_code == 404
        assert response.json() == {"error": "had khona rah makayanach wa ghayaraha."}

    @pytest.mark.parametrize("raw_id", NON_NUMERIC_IDS)
    def test_non_numeric_id_rejected_without_query(self, client, executed, raw_id) -> None:
        response = client.get(f"/artisans/{raw_id}")
        assert response.status_code == 400
        assert response.json() == {"error": "ID must be a number."}
        assert executed == []

    def test_round_trip_matches_created_object(self, client) -> None:
        payload = {
            "nom": "Youssef",
            "profession": "Dinandier",
            "telephone": "0612345678",
            "adresse": "Médina, Fès",
            "note": 4.5,
        }
        created = client.post("/artisans", json=payload).json()

        response = client.get(f"/artisans/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_storage_error_returns_generic_500(self, client, fatima, broken_db) -> None:
        response = client.get(f"/artisans/{fatima['id']}")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch artisan"}


class TestCreateArtisan:
    """Tests for POST /artisans."""

    def test_minimal_payload_gets_defaults(self, client) -> None:
        response = client.post("/artisans", json={"nom": "Fatima", "profession": "Potter"})
        assert response.status_code == 201

        body = response.json()
        assert isinstance(body["id"], int)
        assert body["nom"] == "Fatima"
        assert body["profession"] == "Potter"
        assert body["telephone"] is None
        assert body["adresse"] is None
        assert body["note"] == 0.0

    def test_full_payload_persisted(self, client) -> None:
        payload = {
            "nom": "Khadija",
            "profession": "Tisserande",
            "telephone": "0698765432",
            "adresse": "Safi",
            "note": 3.5,
        }
        body = client.post("/artisans", json=payload).json()
        assert {k: body[k] for k in payload} == payload

    def test_falsy_optional_values_replaced_by_defaults(self, client) -> None:
        response = client.post(
            "/artisans",
            json={"nom": "Omar", "profession": "Forgeron", "telephone": "", "adresse": "", "note": 0},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["telephone"] is None
        assert body["adresse"] is None
        assert body["note"] == 0.0

    @pytest.mark.parametrize(
        "payload",
        [
            {"profession": "Potter"},
            {"nom": "", "profession": "Potter"},
            {"nom": "Fatima"},
            {"nom": "Fatima", "profession": None},
            {},
        ],
    )
    def test_missing_required_fields_rejected(self, client, executed, payload) -> None:
        response = client.post("/artisans", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": 'Fields "nom" and "profession" are required.'}
        assert executed == []

    def test_rejected_create_persists_nothing(self, client) -> None:
        for _ in range(2):
            client.post("/artisans", json={"nom": "", "profession": "Potter"})
        assert client.get("/artisans").json() == []

    def test_missing_body_rejected(self, client) -> None:
        response = client.post("/artisans")
        assert response.status_code == 400
        assert response.json() == {"error": 'Fields "nom" and "profession" are required.'}

    def test_unknown_fields_ignored(self, client) -> None:
        response = client.post("/artisans", json={"nom": "Salma", "profession": "Bijoutière", "ville": "Rabat"})
        assert response.status_code == 201
        assert "ville" not in response.json()

    def test_non_string_telephone_stored(self, client) -> None:
        response = client.post("/artisans", json={"nom": "Salma", "profession": "Bijoutière", "telephone": 612345678})
        assert response.status_code == 201
        assert str(response.json()["telephone"]) == "612345678"

    @pytest.mark.parametrize("body", [["x"], "Fatima", 42])
    def test_non_object_body_rejected(self, client, executed, body) -> None:
        response = client.post("/artisans", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": 'Fields "nom" and "profession" are required.'}
        assert executed == []

    def test_malformed_json_rejected(self, client, executed) -> None:
        response = client.post("/artisans", content=b'{"nom": ', headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body."}
        assert executed == []

    def test_value_rejected_by_storage_returns_generic_500(self, client) -> None:
        response = client.post("/artisans", json={"nom": "Salma", "profession": "Bijoutière", "adresse": {"rue": "Talaa"}})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to add artisan"}
        assert client.get("/artisans").json() == []

    def test_storage_error_returns_generic_500(self, client, broken_db) -> None:
        response = client.post("/artisans", json={"nom": "Fatima", "profession": "Potter"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to add artisan"}


class TestUpdateArtisan:
    """Tests for PUT /artisans/{id}."""

    def test_updates_only_supplied_field(self, client) -> None:
        created = client.post(
            "/artisans",
            json={"nom": "Hamza", "profession": "Zellige", "telephone": "0611111111", "adresse": "Fès"},
        ).json()

        response = client.put(f"/artisans/{created['id']}", json={"note": 4.5})
        assert response.status_code == 200
        assert response.json() == {**created, "note": 4.5}
        assert client.get(f"/artisans/{created['id']}").json() == {**created, "note": 4.5}

    def test_explicit_null_and_zero_count_as_present(self, client) -> None:
        created = client.post(
            "/artisans",
            json={"nom": "Nadia", "profession": "Tapissière", "telephone": "0622222222", "note": 3.0},
        ).json()

        response = client.put(f"/artisans/{created['id']}", json={"telephone": None, "note": 0})
        assert response.status_code == 200
        body = response.json()
        assert body["telephone"] is None
        assert body["note"] == 0.0
        assert body["nom"] == "Nadia"

    def test_update_statement_touches_only_present_columns(self, client, fatima, executed) -> None:
        client.put(f"/artisans/{fatima['id']}", json={"note": 2.0, "nom": "Fatima Z."})

        update = executed[-1]
        assert update.sql.startswith("UPDATE artisans SET nom = :p1, note = :p2 WHERE id = :p3")
        assert update.params == ("Fatima Z.", 2.0, fatima["id"])

    def test_empty_body_rejected_without_mutation(self, client, fatima, executed) -> None:
        response = client.put(f"/artisans/{fatima['id']}", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "No fields to update."}
        assert [q.sql.split()[0] for q in executed] == ["SELECT"]

    def test_only_unknown_fields_rejected(self, client, fatima) -> None:
        response = client.put(f"/artisans/{fatima['id']}", json={"ville": "Rabat"})
        assert response.status_code == 400
        assert response.json() == {"error": "No fields to update."}

    def test_missing_body_rejected(self, client, fatima) -> None:
        response = client.put(f"/artisans/{fatima['id']}")
        assert response.status_code == 400
        assert response.json() == {"error": "No fields to update."}

    def test_missing_artisan_checked_before_fields(self, client) -> None:
        response = client.put("/artisans/999", json={})
        assert response.status_code == 404
        assert response.json() == {"error": "Artisan not found."}

    def test_missing_artisan_checked_before_body_values(self, client) -> None:
        response = client.put("/artisans/999", json={"nom": 123})
        assert response.status_code == 404
        assert response.json() == {"error": "Artisan not found."}

    def test_non_object_body_rejected_without_mutation(self, client, fatima, executed) -> None:
        response = client.put(f"/artisans/{fatima['id']}", json=["nom"])
        assert response.status_code == 400
        assert response.json() == {"error": "No fields to update."}
        assert [q.sql.split()[0] for q in executed] == ["SELECT"]

    def test_malformed_json_rejected(self, client, fatima) -> None:
        response = client.put(
            f"/artisans/{fatima['id']}", content=b"{note: 4}", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body."}

    @pytest.mark.parametrize("raw_id", NON_NUMERIC_IDS)
    def test_non_numeric_id_rejected_without_query(self, client, executed, raw_id) -> None:
        response = client.put(f"/artisans/{raw_id}", json={"note": 1.0})
        assert response.status_code == 400
        assert response.json() == {"error": "ID must be a number."}
        assert executed == []

    def test_row_deleted_before_update_returns_null_body(self, client, fatima, racing_delete) -> None:
        response = client.put(f"/artisans/{fatima['id']}", json={"note": 4.0})
        assert response.status_code == 200
        assert response.json() is None

    def test_storage_error_returns_generic_500(self, client, fatima, broken_db) -> None:
        response = client.put(f"/artisans/{fatima['id']}", json={"note": 4.0})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to update artisan"}


class TestDeleteArtisan:
    """Tests for DELETE /artisans/{id}."""

    def test_delete_then_get_returns_404(self, client, fatima) -> None:
        response = client.delete(f"/artisans/{fatima['id']}")
        assert response.status_code == 204
        assert response.content == b""

        response = client.get(f"/artisans/{fatima['id']}")
        assert response.status_code == 404

    def test_delete_twice_returns_404(self, client, fatima) -> None:
        client.delete(f"/artisans/{fatima['id']}")
        response = client.delete(f"/artisans/{fatima['id']}")
        assert response.status_code == 404
        assert response.json() == {"error": "Artisan not found."}

    def test_delete_leaves_other_rows(self, client, fatima) -> None:
        other = client.post("/artisans", json={"nom": "Karim", "profession": "Plâtrier"}).json()
        client.delete(f"/artisans/{fatima['id']}")
        assert client.get("/artisans").json() == [other]

    @pytest.mark.parametrize("raw_id", NON_NUMERIC_IDS)
    def test_non_numeric_id_rejected_without_query(self, client, executed, raw_id) -> None:
        response = client.delete(f"/artisans/{raw_id}")
        assert response.status_code == 400
        assert response.json() == {"error": "ID must be a number."}
        assert executed == []

    def test_row_deleted_before_delete_still_returns_204(self, client, fatima, racing_delete) -> None:
        response = client.delete(f"/artisans/{fatima['id']}")
        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/artisans").json() == []

    def test_storage_error_returns_generic_500(self, client, fatima, broken_db) -> None:
        response = client.delete(f"/artisans/{fatima['id']}")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to delete artisan"}
