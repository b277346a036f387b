"""
Tests de la API de categorías.
"""
from conftest import make_product_payload


def create_category(client, name, description=None):
    payload = {"name": name}
    if description is not None:
        payload["description"] = description
    return client.post("/api/categories", json=payload)


class TestCreateCategory:

    def test_crear_categoria_genera_slug(self, client):
        response = create_category(client, "Remeras")
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Remeras"
        assert data["slug"] == "remeras"
        assert data["id"]

    def test_slug_sin_acentos_ni_simbolos(self, client):
        response = create_category(client, "  Remeras & Más! ", " De verano ")
        data = response.json()["data"]
        assert data["name"] == "Remeras & Más!"
        assert data["slug"] == "remeras-mas"
        assert data["description"] == "De verano"

    def test_nombre_duplicado(self, client):
        assert create_category(client, "Remeras").status_code == 201
        response = create_category(client, "Remeras")
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "DUPLICATE_CATEGORY"
        assert body["message"] == "Ya existe una categoría con ese nombre"

    def test_slug_duplicado(self, client):
        """Nombres distintos que generan el mismo slug también chocan"""
        assert create_category(client, "Remeras").status_code == 201
        response = create_category(client, "remeras!")
        assert response.status_code == 400
        assert response.json()["error"] == "DUPLICATE_CATEGORY"

    def test_nombre_requerido(self, client):
        response = client.post("/api/categories", json={"description": "sin nombre"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"] == ["El nombre es requerido"]

    def test_body_que_no_es_objeto(self, client):
        response = client.post("/api/categories", json=["Remeras"])
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestListCategories:

    def test_ordenadas_por_nombre(self, client):
        for name in ("Pantalones", "Bermudas", "Musculosas"):
            create_category(client, name)

        response = client.get("/api/categories")
        assert response.status_code == 200
        names = [c["name"] for c in response.json()["data"]["categories"]]
        assert names == ["Bermudas", "Musculosas", "Pantalones"]


class TestUpdateCategory:

    def test_cambiar_nombre_regenera_slug(self, client):
        category_id = create_category(client, "Remeras").json()["data"]["id"]

        response = client.put("/api/categories", json={"id": category_id, "name": "Camisetas Básicas"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Camisetas Básicas"
        assert data["slug"] == "camisetas-basicas"

    def test_solo_descripcion(self, client):
        category_id = create_category(client, "Remeras", "vieja").json()["data"]["id"]

        response = client.put("/api/categories", json={"id": category_id, "description": " nueva "})
        data = response.json()["data"]
        assert data["description"] == "nueva"
        assert data["slug"] == "remeras"

    def test_falta_id(self, client):
        response = client.put("/api/categories", json={"name": "X"})
        assert response.status_code == 400
        assert response.json()["error"] == "MISSING_ID"

    def test_sin_datos(self, client):
        category_id = create_category(client, "Remeras").json()["data"]["id"]
        response = client.put("/api/categories", json={"id": category_id})
        assert response.status_code == 400
        assert response.json()["error"] == "NO_UPDATES"

    def test_no_encontrada(self, client):
        response = client.put("/api/categories", json={"id": "no-existe", "name": "X"})
        assert response.status_code == 404
        assert response.json()["error"] == "CATEGORY_NOT_FOUND"

    def test_nombre_duplicado(self, client):
        create_category(client, "Remeras")
        category_id = create_category(client, "Buzos").json()["data"]["id"]

        response = client.put("/api/categories", json={"id": category_id, "name": "Remeras"})
        assert response.status_code == 400
        assert response.json()["error"] == "DUPLICATE_CATEGORY"

        # La categoría original no cambió
        names = [c["name"] for c in client.get("/api/categories").json()["data"]["categories"]]
        assert names == ["Buzos", "Remeras"]


class TestDeleteCategory:

    def test_eliminar(self, client):
        category_id = create_category(client, "Remeras").json()["data"]["id"]

        response = client.delete(f"/api/categories?id={category_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["data"]["ok"] is True
        assert body["message"] == "Categoría eliminada"
        assert client.get("/api/categories").json()["data"]["categories"] == []

    def test_falta_id(self, client):
        response = client.delete("/api/categories")
        assert response.status_code == 400
        assert response.json()["error"] == "MISSING_ID"

    def test_no_encontrada(self, client):
        response = client.delete("/api/categories?id=no-existe")
        assert response.status_code == 404

    def test_con_productos_se_bloquea(self, client):
        category_id = create_category(client, "Remeras").json()["data"]["id"]
        client.post("/api/products", json=make_product_payload(category=category_id))

        response = client.delete(f"/api/categories?id={category_id}")
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "CATEGORY_HAS_PRODUCTS"
        assert body["details"][0]["products_count"] == 1

    def test_force_desvincula_productos(self, client):
        category_id = create_category(client, "Remeras").json()["data"]["id"]
        product_id = client.post("/api/products", json=make_product_payload(category=category_id)).json()["data"]["id"]

        response = client.delete(f"/api/categories?id={category_id}&force=true")
        assert response.status_code == 200
        assert response.json()["data"]["products_count"] == 1

        product = client.get(f"/api/products/{product_id}").json()["data"]
        assert product["category"] is None
        assert product["category_info"] is None
