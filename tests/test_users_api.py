from bson import ObjectId


def create(client, **overrides):
    body = {"name": "A", "age": 30, "city": "X", "email": "a@x.com", "hobbies": ["x"]}
    body.update(overrides)
    response = client.post("/users", json=body)
    assert response.status_code == 201
    return response.json()["savedUser"]


def test_list_empty(client):
    response = client.get("/users")
    assert response.status_code == 200
    assert response.json() == []


def test_create_splits_hobbies_string(client, sample_user):
    response = client.post("/users", json=sample_user)
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User created"
    saved = data["savedUser"]
    assert saved["hobbies"] == ["x", "y"]
    assert saved["name"] == "A"
    assert saved["age"] == 30
    assert ObjectId.is_valid(saved["_id"])
    assert saved["id"] == saved["_id"]


def test_create_discards_empty_hobby_tokens(client, sample_user):
    sample_user["hobbies"] = "reading, coding, "
    response = client.post("/users", json=sample_user)
    assert response.json()["savedUser"]["hobbies"] == ["reading", "coding"]


def test_create_without_hobbies_defaults_to_empty(client, sample_user):
    del sample_user["hobbies"]
    response = client.post("/users", json=sample_user)
    assert response.status_code == 201
    assert response.json()["savedUser"]["hobbies"] == []


def test_create_then_list_contains_record_once(client, users_collection):
    saved = create(client)
    response = client.get("/users")
    ids = [user["_id"] for user in response.json()]
    assert ids.count(saved["_id"]) == 1
    assert len(users_collection.documents) == 1


def test_create_missing_field_is_400(client, sample_user):
    del sample_user["email"]
    response = client.post("/users", json=sample_user)
    assert response.status_code == 400
    assert "email" in response.json()["message"]


def test_create_bad_age_is_400(client, sample_user):
    sample_user["age"] = "thirty"
    response = client.post("/users", json=sample_user)
    assert response.status_code == 400
    assert response.json()["message"].startswith("User validation failed: age:")


def test_create_invalid_json_is_400(client):
    response = client.post(
        "/users", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert "message" in response.json()


def test_create_ignores_client_supplied_id(client, sample_user):
    sample_user["_id"] = "000000000000000000000000"
    saved = client.post("/users", json=sample_user).json()["savedUser"]
    assert saved["_id"] != "000000000000000000000000"


def test_update_replaces_only_target(client):
    first = create(client, name="First", email="first@x.com")
    second = create(client, name="Second", email="second@x.com")

    response = client.put(
        f"/users/{first['_id']}",
        json={"name": "Renamed", "age": 31, "city": "Y", "email": "new@x.com", "hobbies": "a, b"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "User updated"
    assert data["updatedUser"] == {
        "_id": first["_id"],
        "id": first["_id"],
        "name": "Renamed",
        "age": 31,
        "city": "Y",
        "email": "new@x.com",
        "hobbies": ["a", "b"],
    }

    users = {user["_id"]: user for user in client.get("/users").json()}
    assert users[second["_id"]] == second
    assert users[first["_id"]]["name"] == "Renamed"


def test_update_is_full_replace(client):
    saved = create(client, hobbies=["x", "y"])
    response = client.put(
        f"/users/{saved['_id']}",
        json={"name": "A", "age": 30, "city": "X", "email": "a@x.com"},
    )
    assert response.json()["updatedUser"]["hobbies"] == []


def test_update_unknown_id_is_404(client, sample_user):
    response = client.put(f"/users/{ObjectId()}", json=sample_user)
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_update_malformed_id_is_404(client, sample_user):
    response = client.put("/users/not-an-id", json=sample_user)
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_update_bad_body_is_400(client):
    saved = create(client)
    response = client.put(f"/users/{saved['_id']}", json={"name": "only"})
    assert response.status_code == 400


def test_delete_removes_record(client):
    saved = create(client)
    other = create(client, email="b@x.com")

    response = client.delete(f"/users/{saved['_id']}")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "User deleted"
    assert data["deletedUser"] == saved

    ids = [user["_id"] for user in client.get("/users").json()]
    assert ids == [other["_id"]]


def test_delete_unknown_id_is_404(client):
    response = client.delete(f"/users/{ObjectId()}")
    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


def test_delete_twice_is_404(client):
    saved = create(client)
    assert client.delete(f"/users/{saved['_id']}").status_code == 200
    assert client.delete(f"/users/{saved['_id']}").status_code == 404


def test_storage_failure_is_500(client, users_collection):
    users_collection.fail = True
    response = client.get("/users")
    assert response.status_code == 500
    assert "connection refused" in response.json()["message"]


def test_storage_failure_on_create_is_500(client, users_collection, sample_user):
    users_collection.fail = True
    response = client.post("/users", json=sample_user)
    assert response.status_code == 500


def test_duplicate_emails_are_accepted(client):
    create(client, email="same@x.com")
    create(client, email="same@x.com")
    assert len(client.get("/users").json()) == 2
