import os


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_index_is_served(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "/run" in response.text


def test_cors_allows_any_origin(client):
    response = client.options(
        "/run",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("*", "http://example.com")


def test_static_dir_is_shipped_with_core():
    from core.config import BASE_DIR, settings

    assert settings.STATIC_DIR == os.path.join(BASE_DIR, "static")
    assert os.path.isfile(os.path.join(settings.STATIC_DIR, "index.html"))
