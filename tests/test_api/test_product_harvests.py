"""Tests for harvests nested under /api/productos/{id}/cosechas."""

import pytest
from httpx import AsyncClient


class TestProductHarvests:
    @pytest.mark.asyncio
    async def test_list_for_product(self, client: AsyncClient):
        response = await client.get("/api/productos/AGR001/cosechas")
        assert response.status_code == 200

        body = response.json()
        assert [h["id"] for h in body["data"]] == ["COS001", "COS002"]
        assert body["message"] == "Se encontraron 2 cosechas del producto AGR001"

    @pytest.mark.asyncio
    async def test_list_for_unknown_product(self, client: AsyncClient):
        response = await client.get("/api/productos/AGR999/cosechas")
        assert response.status_code == 404
        assert response.json()["errorCode"] == "PRODUCT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_create_takes_product_from_path(self, client: AsyncClient, harvest_body):
        harvest_body["productoId"] = "AGR001"

        response = await client.post("/api/productos/AGR002/cosechas", json=harvest_body)
        assert response.status_code == 201
        assert response.json()["data"]["productoId"] == "AGR002"

    @pytest.mark.asyncio
    async def test_create_for_unknown_product(self, client: AsyncClient, harvest_body):
        response = await client.post("/api/productos/AGR999/cosechas", json=harvest_body)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_own_harvest(self, client: AsyncClient):
        response = await client.get("/api/productos/AGR002/cosechas/COS004")
        assert response.status_code == 200
        assert response.json()["data"]["calidad"] == "Segunda"

    @pytest.mark.asyncio
    async def test_get_other_products_harvest_is_rejected(self, client: AsyncClient):
        response = await client.get("/api/productos/AGR002/cosechas/COS001")
        assert response.status_code == 409

        body = response.json()
        assert body["errorCode"] == "HARVEST_NOT_BELONGING_TO_PRODUCT"
        assert body["message"] == "La cosecha COS001 no pertenece al producto AGR002"
        assert "data" not in body

    @pytest.mark.asyncio
    async def test_get_missing_harvest(self, client: AsyncClient):
        response = await client.get("/api/productos/AGR001/cosechas/COS999")
        assert response.status_code == 404
        assert response.json()["errorCode"] == "HARVEST_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_own_harvest(self, client: AsyncClient, harvest_body):
        response = await client.put("/api/productos/AGR001/cosechas/COS002", json=harvest_body)
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["productoId"] == "AGR001"
        assert data["cantidadCosechada"] == 250.0

    @pytest.mark.asyncio
    async def test_update_other_products_harvest_is_rejected(
        self, client: AsyncClient, harvest_body
    ):
        response = await client.put("/api/productos/AGR003/cosechas/COS002", json=harvest_body)
        assert response.status_code == 409

        unchanged = await client.get("/api/cosechas/COS002")
        assert unchanged.json()["data"]["cantidadCosechada"] == 550.0

    @pytest.mark.asyncio
    async def test_delete_other_products_harvest_is_rejected(self, client: AsyncClient):
        response = await client.delete("/api/productos/AGR003/cosechas/COS001")
        assert response.status_code == 409

        still_there = await client.get("/api/cosechas/COS001")
        assert still_there.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_own_harvest(self, client: AsyncClient):
        response = await client.delete("/api/productos/AGR003/cosechas/COS005")
        assert response.status_code == 200

        listed = await client.get("/api/productos/AGR003/cosechas")
        assert listed.json()["data"] == []
