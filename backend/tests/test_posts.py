"""Posts API의 버전 관리/발행 시나리오를 검증하는 자동화 테스트입니다."""

from blog.errors import POST_NOT_FOUND
from blog.models.post import Post, PostVersion
from tests.conftest import create_post

UNKNOWN_POST_ID = "01JAQDCB26N888RY1ZQ4N6N9YN"


def _versions(db, post_id):
    return (
        db.query(PostVersion.id, PostVersion.version_number, PostVersion.published_at)
        .filter(PostVersion.post_id == post_id)
        .order_by(PostVersion.version_number.asc())
        .all()
    )


def test_create_then_get_post(client):
    created = create_post(client, "T", "C")
    assert created["post_id"]
    assert created["post_version_id"]
    assert created["title"] == "T"
    assert created["content"] == "C"

    resp = client.get(f"/api/posts/{created['post_id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["post_id"] == created["post_id"]
    assert body["current_version_id"] == created["post_version_id"]
    assert body["version_number"] == 1
    assert body["published_at"] is None
    assert body["categories"] == []
    assert body["created_at"] == body["updated_at"]


def test_create_links_post_and_first_draft(client, db):
    created = create_post(client)
    post = db.query(Post).filter(Post.id == created["post_id"]).first()
    version = db.query(PostVersion).filter(PostVersion.id == created["post_version_id"]).first()
    assert post.current_version_id == version.id
    assert version.post_id == post.id
    assert version.version_number == 1
    assert version.published_at is None


def test_create_sanitizes_title_and_content(client):
    created = create_post(
        client,
        "Test Post<script>alert('XSS')</script>",
        "This is a <script>alert('XSS')</script>test post content with <b>some bold text</b>",
    )
    body = client.get(f"/api/posts/{created['post_id']}").json()
    assert body["title"] == "Test Post"
    assert body["content"] == "This is a test post content with <b>some bold text</b>"


def test_create_requires_title_and_content(client):
    resp = client.post("/api/posts", json={"title": "", "content": ""})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "title and content required"

    resp = client.post("/api/posts", json={"title": "only title"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "content required"


def test_create_rejects_title_that_sanitizes_to_nothing(client, db):
    resp = client.post("/api/posts", json={"title": "<script>x()</script>", "content": "body"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "title required"
    assert db.query(Post).count() == 0


def test_get_post_invalid_and_unknown_id(client):
    resp = client.get("/api/posts/99999999999999999999999999")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid post ID"

    resp = client.get(f"/api/posts/{UNKNOWN_POST_ID}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == POST_NOT_FOUND


def test_update_before_publish_amends_draft_in_place(client, db):
    created = create_post(client, "T", "C")
    post_id = created["post_id"]

    first = client.put(f"/api/posts/{post_id}", json={"title": "T1", "content": "C1"})
    second = client.put(f"/api/posts/{post_id}", json={"title": "T2<script>x</script>", "content": "C2"})
    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["post_version_id"] == created["post_version_id"]
    assert second.json()["title"] == "T2"

    versions = _versions(db, post_id)
    assert len(versions) == 1
    assert versions[0].version_number == 1

    body = client.get(f"/api/posts/{post_id}").json()
    assert body["title"] == "T2"
    assert body["content"] == "C2"
    assert body["version_number"] == 1
    assert body["created_at"] == body["updated_at"]


def test_update_keeps_omitted_fields(client):
    created = create_post(client, "T", "C")
    resp = client.put(f"/api/posts/{created['post_id']}", json={"content": "C2"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "T"
    assert resp.json()["content"] == "C2"


def test_update_requires_some_field(client):
    created = create_post(client)
    resp = client.put(f"/api/posts/{created['post_id']}", json={})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "title or content is required"


def test_update_rejects_field_that_sanitizes_to_empty(client, db):
    created = create_post(client, "T", "C")
    post_id = created["post_id"]
    assert client.post(f"/api/posts/{post_id}/publish").status_code == 200

    resp = client.put(f"/api/posts/{post_id}", json={"title": "<script>x()</script>"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "title required"

    resp = client.put(f"/api/posts/{post_id}", json={"title": "T2", "content": "<style>p {}</style>"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "content required"

    assert len(_versions(db, post_id)) == 1
    assert client.get(f"/api/posts/{post_id}").json()["version_number"] == 1


def test_update_unknown_post_returns_404(client):
    resp = client.put(f"/api/posts/{UNKNOWN_POST_ID}", json={"title": "T"})
    assert resp.status_code == 404


def test_update_after_publish_creates_new_version(client, db):
    created = create_post(client, "T", "C")
    post_id = created["post_id"]
    assert client.post(f"/api/posts/{post_id}/publish").status_code == 200

    resp = client.put(f"/api/posts/{post_id}", json={"title": "T2", "content": "C2"})
    assert resp.status_code == 200
    new_version_id = resp.json()["post_version_id"]
    assert new_version_id != created["post_version_id"]

    versions = _versions(db, post_id)
    assert [v.version_number for v in versions] == [1, 2]
    assert versions[0].published_at is not None
    assert versions[1].published_at is None
    assert versions[1].id == new_version_id

    current = db.query(Post.current_version_id).filter(Post.id == post_id).scalar()
    assert current == new_version_id


def test_publish_is_single_shot(client, db):
    created = create_post(client, "T", "C")
    post_id = created["post_id"]

    first = client.post(f"/api/posts/{post_id}/publish")
    assert first.status_code == 200
    assert first.json()["published_at"]
    assert first.json()["title"] == "T"
    published_at = db.query(PostVersion.published_at).filter(PostVersion.id == created["post_version_id"]).scalar()

    second = client.post(f"/api/posts/{post_id}/publish")
    assert second.status_code == 409
    assert second.json()["detail"] == "post version is already published"
    after = db.query(PostVersion.published_at).filter(PostVersion.id == created["post_version_id"]).scalar()
    assert after == published_at


def test_publish_unknown_post_returns_404(client):
    resp = client.post(f"/api/posts/{UNKNOWN_POST_ID}/publish")
    assert resp.status_code == 404


def test_delete_published_version_is_rejected(client, db):
    created = create_post(client)
    post_id = created["post_id"]
    client.post(f"/api/posts/{post_id}/publish")

    resp = client.delete(f"/api/posts/{post_id}")
    assert resp.status_code == 409
    assert resp.json()["detail"] == "only draft versions can be deleted"
    assert len(_versions(db, post_id)) == 1
    assert client.get(f"/api/posts/{post_id}").status_code == 200


def test_delete_only_draft_hides_post(client, db):
    created = create_post(client)
    post_id = created["post_id"]

    resp = client.delete(f"/api/posts/{post_id}")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Post version deleted"
    assert _versions(db, post_id) == []
    assert db.query(Post.current_version_id).filter(Post.id == post_id).scalar() is None

    assert client.get(f"/api/posts/{post_id}").status_code == 404
    assert client.delete(f"/api/posts/{post_id}").status_code == 404
    assert client.put(f"/api/posts/{post_id}", json={"title": "again"}).status_code == 404


def test_delete_draft_on_top_of_publication_restores_previous(client, db):
    created = create_post(client, "T", "C")
    post_id = created["post_id"]
    client.post(f"/api/posts/{post_id}/publish")
    client.put(f"/api/posts/{post_id}", json={"title": "T2", "content": "C2"})

    resp = client.delete(f"/api/posts/{post_id}")
    assert resp.status_code == 200

    body = client.get(f"/api/posts/{post_id}").json()
    assert body["current_version_id"] == created["post_version_id"]
    assert body["version_number"] == 1
    assert body["title"] == "T"
    assert body["published_at"] is not None

    # 삭제된 번호는 다음 초안이 다시 사용한다.
    resp = client.put(f"/api/posts/{post_id}", json={"title": "T3"})
    assert resp.status_code == 200
    assert [v.version_number for v in _versions(db, post_id)] == [1, 2]


def test_full_lifecycle_scenario(client):
    created = create_post(client, "T", "C")
    post_id = created["post_id"]

    detail = client.get(f"/api/posts/{post_id}").json()
    assert detail["version_number"] == 1
    assert detail["categories"] == []

    published = client.post(f"/api/posts/{post_id}/publish").json()
    assert published["published_at"]
    assert published["title"] == "T"

    updated = client.put(f"/api/posts/{post_id}", json={"title": "T2", "content": "C2"}).json()
    assert updated["post_id"] == post_id
    assert updated["title"] == "T2"

    detail = client.get(f"/api/posts/{post_id}").json()
    assert detail["version_number"] == 2
    assert detail["published_at"] is None

    republished = client.post(f"/api/posts/{post_id}/publish")
    assert republished.status_code == 200
    assert republished.json()["title"] == "T2"
    assert client.get(f"/api/posts/{post_id}").json()["published_at"] is not None


def test_health_check(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
