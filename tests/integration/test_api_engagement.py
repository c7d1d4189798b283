from woodys.db.models import DELETED_COMMENT_CONTENT


def _project(client, headers, title="Oak Table"):
    r = client.post("/projects", json={"title": title}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_rating_flow(client, signup):
    _, owner_headers = signup("owner1")
    _, u2 = signup("rater2")
    _, u3 = signup("rater3")
    project = _project(client, owner_headers)
    base = f"/projects/{project['id']}/ratings"

    assert client.post(base, json={"value": 5}).status_code == 401
    assert client.post(base, json={"value": 5}, headers=u2).status_code == 201
    assert client.get(f"/projects/{project['id']}").json()["average_rating"] == 5.0

    r = client.post(base, json={"value": 4}, headers=u2)
    assert r.status_code == 409

    assert client.put(base, json={"value": 3}, headers=u2).json()["value"] == 3
    assert client.post(base, json={"value": 5}, headers=u3).status_code == 201
    fetched = client.get(f"/projects/{project['id']}").json()
    assert (fetched["average_rating"], fetched["rating_count"]) == (4.0, 2)

    assert client.get(f"{base}/me", headers=u2).json()["value"] == 3
    assert client.get(f"{base}/me", headers=owner_headers).status_code == 404

    listed = client.get(base).json()
    assert [r["username"] for r in listed] == ["rater3", "rater2"]

    stats = client.get(f"{base}/stats").json()
    assert stats["total_ratings"] == 2
    assert stats["distribution"] == {"1": 0, "2": 0, "3": 1, "4": 0, "5": 1}

    trends = client.get(f"{base}/trends", params={"days": 7}).json()
    assert trends[0]["count"] == 2
    assert client.get(f"{base}/trends", params={"days": 400}).status_code == 400

    assert client.delete(base, headers=u3).status_code == 204
    fetched = client.get(f"/projects/{project['id']}").json()
    assert (fetched["average_rating"], fetched["rating_count"]) == (3.0, 1)


def test_out_of_range_rating(client, signup):
    _, owner_headers = signup()
    _, rater = signup()
    project = _project(client, owner_headers)
    r = client.post(f"/projects/{project['id']}/ratings", json={"value": 6}, headers=rater)
    assert r.status_code == 400
    assert r.json()["field"] == "value"


def test_comment_flow(client, signup):
    _, owner_headers = signup("owner1")
    _, commenter = signup("commenter")
    project = _project(client, owner_headers)

    r = client.post(f"/projects/{project['id']}/comments", json={"content": "What glue?", "rating": 4}, headers=commenter)
    assert r.status_code == 201
    comment = r.json()

    r = client.post(f"/comments/{comment['id']}/reply", json={"content": "Titebond III"}, headers=owner_headers)
    assert r.status_code == 201
    reply = r.json()
    assert reply["project_id"] == project["id"]
    assert reply["parent_comment_id"] == comment["id"]

    listing = client.get(f"/projects/{project['id']}/comments").json()
    assert len(listing) == 1
    assert listing[0]["username"] == "commenter"
    assert listing[0]["reply_count"] == 1
    assert listing[0]["replies"][0]["content"] == "Titebond III"

    assert client.put(f"/comments/{comment['id']}", json={"content": "x"}, headers=owner_headers).status_code == 403
    assert client.put(f"/comments/{comment['id']}", json={"content": "Which glue?"}, headers=commenter).json()["content"] == "Which glue?"

    assert client.delete(f"/comments/{comment['id']}", headers=owner_headers).status_code == 403
    assert client.delete(f"/comments/{comment['id']}", headers=commenter).status_code == 204

    deleted = client.get(f"/comments/{comment['id']}").json()
    assert deleted["is_deleted"] is True
    assert deleted["content"] == DELETED_COMMENT_CONTENT
    assert [r["id"] for r in client.get(f"/comments/{comment['id']}/replies").json()] == [reply["id"]]
    assert client.get(f"/projects/{project['id']}/comments/count").json() == {"project_id": project["id"], "count": 1}
    assert client.put(f"/comments/{comment['id']}", json={"content": "again"}, headers=commenter).status_code == 403


def test_comment_on_unknown_project(client, signup):
    _, headers = signup()
    assert client.post("/projects/999/comments", json={"content": "hello"}, headers=headers).status_code == 404
    assert client.post("/comments/999/reply", json={"content": "hello"}, headers=headers).status_code == 404


def test_project_list_flow(client, signup):
    _, u1 = signup("curator")
    _, u2 = signup("visitor")
    project = _project(client, u1)

    r = client.post("/project-lists", json={"name": "Favorites"}, headers=u1)
    assert r.status_code == 201
    favorites = r.json()
    assert favorites["is_public"] is False

    assert client.get(f"/project-lists/{favorites['id']}", headers=u2).status_code == 403
    assert client.get(f"/project-lists/{favorites['id']}").status_code == 403

    r = client.post(f"/project-lists/{favorites['id']}/projects", json={"project_id": project["id"]}, headers=u1)
    assert r.status_code == 201
    assert r.json() == {"project_list_id": favorites["id"], "project_id": project["id"], "in_list": True}
    r = client.post(f"/project-lists/{favorites['id']}/projects", json={"project_id": project["id"]}, headers=u1)
    assert r.status_code == 409

    detail = client.get(f"/project-lists/{favorites['id']}", headers=u1).json()
    assert detail["project_count"] == 1
    assert detail["projects"][0]["id"] == project["id"]
    membership = client.get(f"/project-lists/{favorites['id']}/projects/{project['id']}", headers=u1).json()
    assert membership["in_list"] is True

    r = client.put(f"/project-lists/{favorites['id']}", json={"is_public": True}, headers=u1)
    assert r.json()["is_public"] is True
    assert [pl["id"] for pl in client.get("/project-lists/public").json()] == [favorites["id"]]
    assert client.get(f"/project-lists/{favorites['id']}", headers=u2).status_code == 200

    assert client.delete(f"/project-lists/{favorites['id']}/projects/{project['id']}", headers=u1).status_code == 204
    assert client.delete(f"/project-lists/{favorites['id']}/projects/{project['id']}", headers=u1).status_code == 404

    assert client.delete(f"/project-lists/{favorites['id']}", headers=u2).status_code == 403
    assert client.delete(f"/project-lists/{favorites['id']}", headers=u1).status_code == 204
    r = client.post(f"/project-lists/{favorites['id']}/projects", json={"project_id": project["id"]}, headers=u1)
    assert r.status_code == 404
