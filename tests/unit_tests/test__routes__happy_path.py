import base64
from pathlib import Path

from bson import ObjectId
from fastapi import status
from fastapi.testclient import TestClient

from tests.fixtures.file_fixtures import encode, file_payload, folder_payload

PAGE_SIZE = 20


def test__upload_file__happy_path(client: TestClient, auth_headers, user_id):
    response = client.post(
        "/files",
        json={"name": "a.txt", "type": "file", "data": base64.b64encode(b"hello").decode()},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert ObjectId.is_valid(body.pop("id"))
    assert body == {
        "userId": str(user_id),
        "name": "a.txt",
        "type": "file",
        "isPublic": False,
        "parentId": 0,
    }


def test__upload_then_show__returns_same_record(client: TestClient, auth_headers):
    created = client.post("/files", json=file_payload("a.txt"), headers=auth_headers).json()

    response = client.get(f"/files/{created['id']}", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == created


def test__upload_file__never_exposes_internal_fields(client: TestClient, auth_headers):
    body = client.post("/files", json=file_payload(isPublic=True), headers=auth_headers).json()

    assert "_id" not in body
    assert "localPath" not in body
    assert "data" not in body
    assert body["isPublic"] is True


def test__upload_file__stored_record_has_path_but_no_data(client: TestClient, auth_headers, mongo_adapter, storage_dir):
    body = client.post("/files", json=file_payload(), headers=auth_headers).json()

    stored = mongo_adapter.get_document("files", body["id"])
    assert "data" not in stored
    assert Path(stored["localPath"]).parent == storage_dir


def test__upload_content__round_trips_to_disk(client: TestClient, auth_headers, mongo_adapter):
    content = bytes(range(256)) * 4

    body = client.post("/files", json=file_payload("blob.bin", content), headers=auth_headers).json()

    stored = mongo_adapter.get_document("files", body["id"])
    assert Path(stored["localPath"]).read_bytes() == content


def test__upload_image__is_stored_like_a_file(client: TestClient, auth_headers, mongo_adapter):
    payload = {"name": "pic.png", "type": "image", "data": encode(b"\x89PNG\r\n")}

    response = client.post("/files", json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["type"] == "image"
    stored = mongo_adapter.get_document("files", response.json()["id"])
    assert Path(stored["localPath"]).read_bytes() == b"\x89PNG\r\n"


def test__upload_folder__has_no_content(client: TestClient, auth_headers, mongo_adapter, storage_dir):
    response = client.post("/files", json=folder_payload(data=encode(b"ignored")), headers=auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["type"] == "folder"
    assert body["parentId"] == 0
    assert "data" not in body
    stored = mongo_adapter.get_document("files", body["id"])
    assert "localPath" not in stored
    assert "data" not in stored
    assert not storage_dir.exists()


def test__upload_into_folder__parent_id_is_a_string(client: TestClient, auth_headers, mongo_adapter):
    folder = client.post("/files", json=folder_payload(), headers=auth_headers).json()

    child = client.post("/files", json=file_payload(parentId=folder["id"]), headers=auth_headers).json()
    subfolder = client.post("/files", json=folder_payload("sub", parentId=folder["id"]), headers=auth_headers).json()

    assert child["parentId"] == folder["id"]
    assert subfolder["parentId"] == folder["id"]
    stored = mongo_adapter.get_document("files", child["id"])
    assert stored["parentId"] == ObjectId(folder["id"])


def test__upload__root_sentinel_counts_as_no_parent(client: TestClient, auth_headers):
    response = client.post("/files", json=file_payload(parentId=0), headers=auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["parentId"] == 0


def test__upload__storage_root_creation_is_repeatable(client: TestClient, auth_headers, storage_dir):
    for index in range(2):
        response = client.post("/files", json=file_payload(f"{index}.txt"), headers=auth_headers)
        assert response.status_code == status.HTTP_201_CREATED

    assert len(list(storage_dir.iterdir())) == 2


def test__index__lists_root_by_default(client: TestClient, auth_headers, other_auth_headers):
    mine = client.post("/files", json=file_payload("mine.txt"), headers=auth_headers).json()
    folder = client.post("/files", json=folder_payload(), headers=auth_headers).json()
    client.post("/files", json=file_payload("nested.txt", parentId=folder["id"]), headers=auth_headers)
    client.post("/files", json=file_payload("theirs.txt"), headers=other_auth_headers)

    response = client.get("/files", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [mine, folder]


def test__index__lists_folder_children(client: TestClient, auth_headers):
    folder = client.post("/files", json=folder_payload(), headers=auth_headers).json()
    child = client.post("/files", json=file_payload(parentId=folder["id"]), headers=auth_headers).json()

    response = client.get("/files", params={"parentId": folder["id"]}, headers=auth_headers)

    assert response.json() == [child]
    for record in response.json():
        assert "localPath" not in record
        assert "_id" not in record


def _insert_folders(mongo_adapter, user_id, count):
    for index in range(count):
        mongo_adapter.create_document("files", {
            "userId": user_id,
            "name": f"folder-{index:02d}",
            "type": "folder",
            "isPublic": False,
            "parentId": 0,
        })


def test__index__pages_are_windows_of_twenty(client: TestClient, auth_headers, mongo_adapter, user_id):
    _insert_folders(mongo_adapter, user_id, 45)

    first = client.get("/files", headers=auth_headers).json()
    second = client.get("/files", params={"page": 1}, headers=auth_headers).json()
    third = client.get("/files", params={"page": 2}, headers=auth_headers).json()
    beyond = client.get("/files", params={"page": 3}, headers=auth_headers).json()

    assert [record["name"] for record in first] == [f"folder-{i:02d}" for i in range(0, PAGE_SIZE)]
    assert [record["name"] for record in second] == [f"folder-{i:02d}" for i in range(20, 40)]
    assert len(third) == 5
    assert beyond == []


def test__index__bad_page_means_first_page(client: TestClient, auth_headers, mongo_adapter, user_id):
    _insert_folders(mongo_adapter, user_id, 25)

    for page in ("abc", "-3", ""):
        response = client.get("/files", params={"page": page}, headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()[0]["name"] == "folder-00"
        assert len(response.json()) == PAGE_SIZE


def test__index__malformed_parent_id_falls_back(client: TestClient, auth_headers):
    root_file = client.post("/files", json=file_payload(), headers=auth_headers).json()

    not_numeric = client.get("/files", params={"parentId": "not-an-id"}, headers=auth_headers)
    zero = client.get("/files", params={"parentId": "0"}, headers=auth_headers)
    numeric = client.get("/files", params={"parentId": "42"}, headers=auth_headers)

    assert not_numeric.json() == [root_file]
    assert zero.json() == [root_file]
    assert numeric.status_code == status.HTTP_200_OK
    assert numeric.json() == []


def test__status__reports_backends(client: TestClient, mongo_adapter, monkeypatch):
    monkeypatch.setattr(mongo_adapter, "is_alive", lambda: True)

    response = client.get("/status")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"redis": True, "db": True}


def test__stats__counts_users_and_files(client: TestClient, auth_headers, other_auth_headers):
    client.post("/files", json=file_payload(), headers=auth_headers)
    client.post("/files", json=folder_payload(), headers=other_auth_headers)

    response = client.get("/stats")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"users": 2, "files": 2}
