"""Request helpers shared by route and client tests."""

from fastapi.testclient import TestClient


def make_folder(client: TestClient, name: str, **extra) -> dict:
    r = client.post("/api/folders", json={"name": name, **extra})
    assert r.status_code == 201, r.text
    return r.json()


def make_tag(client: TestClient, name: str, **extra) -> dict:
    r = client.post("/api/tags", json={"name": name, **extra})
    assert r.status_code == 201, r.text
    return r.json()


def make_prompt(
    client: TestClient,
    title: str,
    content: str = "Hello {{name}}",
    *,
    folder_id: str | None = None,
    tag_ids: list[str] | None = None,
    description: str | None = None,
) -> dict:
    r = client.post(
        "/api/prompts",
        json={
            "title": title,
            "content": content,
            "description": description,
            "folder_id": folder_id,
            "tag_ids": tag_ids or [],
        },
    )
    assert r.status_code == 201, r.text
    return r.json()
