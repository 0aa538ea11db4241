def test_public_list_newest_first_and_type_filter(client, admin_headers):
    for title, kind in [("Rentrée", "text"), ("Affiche", "image"), ("Vidéo", "video")]:
        body = {"title": title, "content": "...", "type": kind}
        if kind == "image":
            body["image_url"] = "https://i.ibb.co/x/affiche.png"
        assert client.post("/notices", json=body, headers=admin_headers).status_code == 201

    r = client.get("/notices")
    assert r.json()["total"] == 3
    assert r.json()["items"][0]["title"] == "Vidéo"

    r = client.get("/notices", params={"type": "image"})
    assert [n["title"] for n in r.json()["items"]] == ["Affiche"]


def test_image_notice_needs_image_url(client, admin_headers):
    r = client.post(
        "/notices?lang=en",
        json={"title": "Poster", "content": "", "type": "image"},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Image notices need an image URL"


def test_unknown_type_rejected(client, admin_headers):
    r = client.post("/notices", json={"title": "x", "content": "y", "type": "audio"}, headers=admin_headers)
    assert r.status_code == 422


def test_update_and_delete(client, admin_headers):
    nid = client.post("/notices", json={"title": "A", "content": "B"}, headers=admin_headers).json()["id"]

    r = client.put(f"/notices/{nid}", json={"title": "A2"}, headers=admin_headers)
    assert r.json()["title"] == "A2"
    assert r.json()["content"] == "B"

    r = client.put(f"/notices/{nid}", json={"type": "image"}, headers=admin_headers)
    assert r.status_code == 400

    assert client.delete(f"/notices/{nid}", headers=admin_headers).status_code == 200
    assert client.get(f"/notices/{nid}").status_code == 404


def test_only_managers_publish(client, make_admin, headers_for):
    coord = make_admin(role="IT supervisor")
    r = client.post("/notices", json={"title": "A", "content": "B"}, headers=headers_for(coord, "admin"))
    assert r.status_code == 403
