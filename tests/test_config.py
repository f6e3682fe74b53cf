import httpx

from app.core.config import LOCAL_DEV_ORIGINS, Settings
from app.main import app


def _settings(**kw) -> Settings:
    return Settings(_env_file=None, MONGO_URI="mongodb://localhost:27017", MONGO_DB="storefront_test", **kw)


def test_cors_origins_parse_csv():
    settings = _settings(ALLOWED_ORIGINS=" https://tienda.example.com , ,https://www.tienda.example.com")

    assert settings.cors_origins() == ["https://tienda.example.com", "https://www.tienda.example.com"]


def test_cors_origins_default_to_local_dev_servers():
    assert _settings().cors_origins() == LOCAL_DEV_ORIGINS
    assert _settings(ALLOWED_ORIGINS=" , ").cors_origins() == LOCAL_DEV_ORIGINS


def test_settings_have_no_unused_route_prefix():
    assert "api_prefix" not in Settings.model_fields


def test_routes_are_mounted_at_root():
    paths = {route.path for route in app.routes}

    assert "/products/{product_code}/recommendations" in paths
    assert "/admin/orders" in paths


async def test_preflight_allows_local_dev_origin():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        resp = await c.options(
            "/products/A/recommendations",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "x-session-id",
            },
        )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
