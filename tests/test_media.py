from siteadmin.services.media import MAX_UPLOAD_SIZE

URL = "/api/v1/media/"


def upload(client, filename="cat.png", mimetype="image/png", size=1024, **extra):
    return client.post(URL, json={
        "filename": filename,
        "url": f"https://cdn.example.com/{filename}",
        "mimetype": mimetype,
        "size": size,
        **extra,
    })


def test_register_and_list(user_client, regular_user):
    r = upload(user_client, width=640, height=480)
    assert r.status_code == 201
    media = r.json()
    assert media["uploaded_by"] == regular_user.id
    assert media["width"] == 640

    body = user_client.get(URL).json()
    assert body["pagination"]["pageSize"] == 20
    assert [m["id"] for m in body["data"]] == [media["id"]]


def test_rejects_unsupported_type(user_client):
    r = upload(user_client, filename="run.exe", mimetype="application/x-msdownload")
    assert r.status_code == 400
    assert r.json()["detail"] == "Unsupported file type: application/x-msdownload"


def test_rejects_large_file(user_client):
    assert upload(user_client, size=MAX_UPLOAD_SIZE).status_code == 201
    r = upload(user_client, filename="big.png", size=MAX_UPLOAD_SIZE + 1)
    assert r.status_code == 400


def test_delete(user_client):
    media = upload(user_client, filename="doc.pdf", mimetype="application/pdf").json()
    assert user_client.delete(f"{URL}{media['id']}").json() == {"id": media["id"]}
    assert user_client.delete(f"{URL}{media['id']}").status_code == 404


def test_media_requires_auth(client):
    assert client.get(URL).status_code == 401
    assert upload(client).status_code == 401
