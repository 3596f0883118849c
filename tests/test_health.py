import asyncio

from httpx import ASGITransport, AsyncClient

from testgen.main import create_app


async def _get_health():
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get("/api/health")


def test_health_ok():
    response = asyncio.run(_get_health())
    assert response.status_code == 200
    body = response.json()
    assert body.get("status") == "ok"
    assert "service" in body
    assert "environment" in body


def test_health_reports_generation_setup():
    body = asyncio.run(_get_health()).json()
    assert body["methods"] == ["DELETE", "GET", "POST", "PUT"]
    assert body["element_types"] == ["button", "form", "input", "link"]
    assert body["suggester"] == "default"
