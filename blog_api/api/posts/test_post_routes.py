# blog_api/api/posts/test_post_routes.py
"""
HTTP tests for /api/posts and /uploads through the Flask test client.

Usage: python -m pytest blog_api/api/posts/test_post_routes.py -v
"""

from blog_api.api.posts.services import MAX_THUMBNAIL_BYTES

DESCRIPTION = "A long enough description for a post."


def _form(image_upload, title="Hello", category="Tech", size=1024, filename="cover.png"):
    form = {"title": title, "category": category, "description": DESCRIPTION}
    if size is not None:
        form["thumbnail"] = image_upload(size, filename)
    return form


def _create(client, headers, image_upload, **kwargs):
    return client.post('/api/posts/', data=_form(image_upload, **kwargs),
                       headers=headers, content_type='multipart/form-data')


def test_create_post_requires_token(client, image_upload):
    response = client.post('/api/posts/', data=_form(image_upload), content_type='multipart/form-data')
    assert response.status_code == 401
    assert response.get_json()['error_code'] == "AUTHORIZATION_REQUIRED"


def test_create_post_rejects_bad_token(client, image_upload):
    response = _create(client, {"Authorization": "Bearer not-a-token"}, image_upload)
    assert response.status_code == 401
    assert response.get_json()['error_code'] == "INVALID_TOKEN"


def test_create_and_read_post(client, login, image_upload):
    alice, headers = login()

    response = _create(client, headers, image_upload)
    assert response.status_code == 201
    post = response.get_json()
    assert post['creator'] == alice
    assert post['title'] == "Hello"
    assert post['created_at']

    fetched = client.get(f"/api/posts/{post['post_id']}")
    assert fetched.status_code == 200
    assert fetched.get_json() == post

    profile = client.get(f'/api/users/{alice}').get_json()
    assert profile['posts'] == 1


def test_create_post_validation(client, login, image_upload):
    _, headers = login()

    missing_title = _create(client, headers, image_upload, title="")
    assert missing_title.status_code == 400
    assert missing_title.get_json()['error_code'] == "VALIDATION_ERROR"

    missing_thumbnail = _create(client, headers, image_upload, size=None)
    assert missing_thumbnail.status_code == 400

    too_big = _create(client, headers, image_upload, size=MAX_THUMBNAIL_BYTES + 1)
    assert too_big.status_code == 413
    assert too_big.get_json()['error_code'] == "PAYLOAD_TOO_LARGE"

    assert client.get('/api/posts/').get_json() == []


def test_listings(client, login, image_upload):
    alice, alice_headers = login()
    bob, bob_headers = login("Bob", "bob@example.com")

    _create(client, alice_headers, image_upload, title="First", category="Tech")
    _create(client, bob_headers, image_upload, title="Second", category="Art")
    _create(client, alice_headers, image_upload, title="Third", category="Tech")

    titles = [p['title'] for p in client.get('/api/posts/').get_json()]
    assert titles == ["Third", "Second", "First"]

    tech = client.get('/api/posts/categories/Tech').get_json()
    assert [p['title'] for p in tech] == ["Third", "First"]

    by_bob = client.get(f'/api/posts/users/{bob}').get_json()
    assert [p['title'] for p in by_bob] == ["Second"]

    assert client.get('/api/posts/categories/Music').get_json() == []


def test_get_unknown_post(client):
    response = client.get('/api/posts/nope')
    assert response.status_code == 404
    assert response.get_json()['error_code'] == "NOT_FOUND"


def test_edit_post(client, login, image_upload):
    _, headers = login()
    post = _create(client, headers, image_upload).get_json()

    response = client.patch(
        f"/api/posts/{post['post_id']}",
        data={"title": "Edited", "category": "Art", "description": "An edited description"},
        headers=headers, content_type='multipart/form-data',
    )

    assert response.status_code == 200
    edited = response.get_json()
    assert edited['title'] == "Edited"
    assert edited['thumbnail'] == post['thumbnail']


def test_edit_post_with_new_thumbnail(client, login, image_upload):
    _, headers = login()
    post = _create(client, headers, image_upload).get_json()

    response = client.patch(
        f"/api/posts/{post['post_id']}",
        data=_form(image_upload, filename="other.jpg"),
        headers=headers, content_type='multipart/form-data',
    )

    edited = response.get_json()
    assert response.status_code == 200
    assert edited['thumbnail'].endswith(".jpg")
    assert client.get(f"/uploads/{post['thumbnail']}").status_code == 404
    assert client.get(f"/uploads/{edited['thumbnail']}").status_code == 200


def test_edit_post_rejects_short_description(client, login, image_upload):
    _, headers = login()
    post = _create(client, headers, image_upload).get_json()

    response = client.patch(
        f"/api/posts/{post['post_id']}",
        data={"title": "Edited", "category": "Art", "description": "short"},
        headers=headers, content_type='multipart/form-data',
    )
    assert response.status_code == 400


def test_only_the_author_may_edit_or_delete(client, login, image_upload):
    alice, alice_headers = login()
    _, bob_headers = login("Bob", "bob@example.com")
    post = _create(client, alice_headers, image_upload, size=1_000_000).get_json()

    edit = client.patch(
        f"/api/posts/{post['post_id']}",
        data={"title": "Mine now", "category": "Art", "description": DESCRIPTION},
        headers=bob_headers, content_type='multipart/form-data',
    )
    assert edit.status_code == 403
    assert edit.get_json()['error_code'] == "FORBIDDEN"

    delete = client.delete(f"/api/posts/{post['post_id']}", headers=bob_headers)
    assert delete.status_code == 403
    assert client.get(f"/api/posts/{post['post_id']}").get_json()['title'] == "Hello"

    response = client.delete(f"/api/posts/{post['post_id']}", headers=alice_headers)
    assert response.status_code == 200
    assert response.get_json() == {"message": f"Post {post['post_id']} is deleted."}

    assert client.get(f"/api/posts/{post['post_id']}").status_code == 404
    assert client.get(f"/uploads/{post['thumbnail']}").status_code == 404
    assert client.get(f'/api/users/{alice}').get_json()['posts'] == 0


def test_delete_unknown_post(client, login):
    _, headers = login()
    response = client.delete('/api/posts/nope', headers=headers)
    assert response.status_code == 404


def test_thumbnail_is_served(client, login, image_upload):
    _, headers = login()
    post = _create(client, headers, image_upload, size=64).get_json()

    response = client.get(f"/uploads/{post['thumbnail']}")
    assert response.status_code == 200
    assert response.data == b"\x89" * 64


def test_unknown_upload_is_not_found(client):
    response = client.get('/uploads/missing.png')
    assert response.status_code == 404
    assert response.get_json()['error_code'] == "NOT_FOUND"
