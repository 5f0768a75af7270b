"""
Tests de /check-connection, /getdocuments y /company
"""
from datetime import datetime, timezone


class TestCheckConnection:
    def test_success(self, client, store):
        store.add("prompts", "p1", text="hola")

        response = client.get("/check-connection")

        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "message": "Successfully connected to Firestore.",
        }
        assert store.calls == [("list_collections", None)]

    def test_success_returns_no_data(self, client, store):
        store.add("secret", "s1", value="no-expuesto")

        response = client.get("/check-connection")

        assert "no-expuesto" not in response.text
        assert "secret" not in response.text

    def test_failure_is_500(self, client, store):
        store.fail_on.add("list_collections")

        response = client.get("/check-connection")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch data from Firestore",
            "kind": "upstream_error",
        }


class TestGetDocuments:
    def test_empty_collection_is_404(self, client):
        response = client.get("/getdocuments")

        assert response.status_code == 404
        assert response.json() == {"error": "No documents found", "kind": "not_found"}

    def test_lists_every_document_with_id(self, client, store):
        store.add("prompts", "a", text="Primer prompt", order=1)
        store.add("prompts", "b", text="Segundo prompt", order=2)
        store.add("prompts", "c", text="Tercer prompt", order=3)

        response = client.get("/getdocuments")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 3
        assert [d["id"] for d in data] == ["a", "b", "c"]
        assert data[0] == {"id": "a", "text": "Primer prompt", "order": 1}

    def test_identifier_wins_over_stored_id_field(self, client, store):
        store.add("prompts", "real-id", id="campo-guardado", text="x")

        data = client.get("/getdocuments").json()

        assert data == [{"id": "real-id", "text": "x"}]

    def test_nested_values_pass_through(self, client, store):
        created = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        store.add(
            "prompts",
            "a",
            createdAt=created,
            tags=["estrategia", "ventas"],
            meta={"version": 2, "active": True, "owner": None},
        )

        data = client.get("/getdocuments").json()

        assert data[0]["tags"] == ["estrategia", "ventas"]
        assert data[0]["meta"] == {"version": 2, "active": True, "owner": None}
        assert data[0]["createdAt"].startswith("2025-03-01T12:00:00")

    def test_binary_fields_are_returned_as_base64(self, client, store):
        store.add("prompts", "a", blob=b"\xff\xfe", text="x")

        response = client.get("/getdocuments")

        assert response.status_code == 200
        assert response.json() == [{"id": "a", "blob": "//4=", "text": "x"}]

    def test_query_failure_is_500(self, client, store):
        store.fail_on.add("prompts")

        response = client.get("/getdocuments")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch documents"

    def test_repeated_calls_are_identical(self, client, store):
        store.add("prompts", "a", text="uno")
        store.add("prompts", "b", text="dos")

        first = client.get("/getdocuments")
        second = client.get("/getdocuments")

        assert first.json() == second.json()


class TestCompany:
    def test_no_matching_company_is_404(self, client, store):
        store.add("StrategicAc", "x", companyName="Acme", createdAt=1)
        store.add("StrategicAc", "y", companyName="argano", createdAt=2)

        response = client.get("/company")

        assert response.status_code == 404
        assert response.json() == {"error": "No company data found", "kind": "not_found"}

    def test_returns_ids_by_descending_creation(self, client, store):
        store.add("StrategicAc", "old", companyName="Argano", createdAt=100, extra="x")
        store.add("StrategicAc", "new", companyName="Argano", createdAt=300)
        store.add("StrategicAc", "mid", companyName="Argano", createdAt=200)
        store.add("StrategicAc", "other", companyName="Acme", createdAt=400)

        response = client.get("/company")

        assert response.status_code == 200
        assert response.json() == [{"id": "new"}, {"id": "mid"}, {"id": "old"}]

    def test_query_failure_is_500(self, client, store):
        store.fail_on.add("StrategicAc")

        response = client.get("/company")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch company data"


def test_unserializable_value_is_json_500(settings, store, provider):
    """Un fallo al serializar la respuesta también devuelve el cuerpo de error"""
    from fastapi.testclient import TestClient

    from services.api.main import create_app

    store.add("prompts", "a", value=object())
    app = create_app(settings=settings, store=store, provider=provider)
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/getdocuments")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "kind": "internal_error",
    }
