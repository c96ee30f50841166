"""Folder and tag CRUD, uniqueness, and what happens to prompts on delete."""

import uuid

import pytest

from tests.helpers import make_folder, make_prompt, make_tag


@pytest.mark.parametrize("resource, label", [("folders", "Folder"), ("tags", "Tag")])
class TestNamedResources:
    def test_list_sorted_by_name(self, client, resource, label):
        for name in ("Zeta", "Alpha", "Mid"):
            assert client.post(f"/api/{resource}", json={"name": name}).status_code == 201
        names = [item["name"] for item in client.get(f"/api/{resource}").json()]
        assert names == ["Alpha", "Mid", "Zeta"]

    def test_duplicate_name_is_409(self, client, resource, label):
        assert client.post(f"/api/{resource}", json={"name": "Work"}).status_code == 201
        r = client.post(f"/api/{resource}", json={"name": "  Work "})
        assert r.status_code == 409
        assert r.json()["detail"] == f"{label} with this name already exists"
        assert len(client.get(f"/api/{resource}").json()) == 1

    def test_blank_name_is_422(self, client, resource, label):
        assert client.post(f"/api/{resource}", json={"name": "   "}).status_code == 422
        assert client.post(f"/api/{resource}", json={}).status_code == 422

    def test_rename(self, client, resource, label):
        created = client.post(f"/api/{resource}", json={"name": "Old"}).json()
        r = client.put(f"/api/{resource}/{created['id']}", json={"name": "New"})
        assert r.status_code == 200
        assert r.json()["name"] == "New"
        assert r.json()["id"] == created["id"]

    def test_rename_to_own_name_is_allowed(self, client, resource, label):
        created = client.post(f"/api/{resource}", json={"name": "Same"}).json()
        r = client.put(f"/api/{resource}/{created['id']}", json={"name": "Same"})
        assert r.status_code == 200

    def test_rename_conflict_is_409(self, client, resource, label):
        client.post(f"/api/{resource}", json={"name": "Taken"})
        other = client.post(f"/api/{resource}", json={"name": "Free"}).json()
        r = client.put(f"/api/{resource}/{other['id']}", json={"name": "Taken"})
        assert r.status_code == 409
        names = {item["name"] for item in client.get(f"/api/{resource}").json()}
        assert names == {"Taken", "Free"}

    def test_update_missing_is_404(self, client, resource, label):
        r = client.put(f"/api/{resource}/{uuid.uuid4()}", json={"name": "x"})
        assert r.status_code == 404
        assert r.json()["detail"] == f"{label} not found"

    def test_delete_missing_is_404(self, client, resource, label):
        assert client.delete(f"/api/{resource}/{uuid.uuid4()}").status_code == 404

    def test_malformed_id_is_400(self, client, resource, label):
        r = client.delete(f"/api/{resource}/123")
        assert r.status_code == 400
        assert r.json()["detail"] == f"Invalid {label} ID format"

    def test_delete(self, client, resource, label):
        created = client.post(f"/api/{resource}", json={"name": "Bye"}).json()
        r = client.delete(f"/api/{resource}/{created['id']}")
        assert r.status_code == 200
        assert r.json() == {"message": f"{label} deleted successfully", "id": created["id"]}
        assert client.get(f"/api/{resource}").json() == []


class TestFolders:
    def test_description_is_kept_and_cleared(self, client):
        folder = make_folder(client, "Docs", description=" Reference docs ")
        assert folder["description"] == "Reference docs"

        r = client.put(f"/api/folders/{folder['id']}", json={"name": "Docs v2"})
        assert r.json()["description"] == "Reference docs"

        r = client.put(f"/api/folders/{folder['id']}", json={"description": None})
        assert r.json()["name"] == "Docs v2"
        assert r.json()["description"] is None

    def test_delete_leaves_prompts_uncategorized(self, client):
        folder = make_folder(client, "Doomed")
        keep = make_folder(client, "Kept")
        moved = make_prompt(client, "Inside", folder_id=folder["id"])
        make_prompt(client, "Elsewhere", folder_id=keep["id"])

        assert client.delete(f"/api/folders/{folder['id']}").status_code == 200

        prompt = client.get(f"/api/prompts/{moved['id']}").json()
        assert prompt["folder"] is None
        uncategorized = client.get("/api/prompts", params={"folderId": "uncategorized"}).json()
        assert [p["id"] for p in uncategorized] == [moved["id"]]
        assert len(client.get("/api/prompts").json()) == 2


class TestTags:
    def test_color(self, client):
        tag = make_tag(client, "urgent", color="#ff0000")
        assert tag["color"] == "#ff0000"
        r = client.put(f"/api/tags/{tag['id']}", json={"color": "  "})
        assert r.json()["color"] is None
        assert r.json()["name"] == "urgent"

    def test_delete_removes_tag_from_prompts(self, client):
        doomed = make_tag(client, "doomed")
        kept = make_tag(client, "kept")
        prompt = make_prompt(client, "Tagged", tag_ids=[doomed["id"], kept["id"]])

        assert client.delete(f"/api/tags/{doomed['id']}").status_code == 200

        body = client.get(f"/api/prompts/{prompt['id']}").json()
        assert [t["name"] for t in body["tags"]] == ["kept"]
        assert client.get("/api/prompts", params={"tagId": doomed["id"]}).json() == []
        assert len(client.get("/api/prompts", params={"tagId": kept["id"]}).json()) == 1
