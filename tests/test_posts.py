POSTS = "/api/v1/posts/"
PAGES = "/api/v1/pages/"
PRODUCTS = "/api/v1/products/"


def create(client, url, **fields):
    r = client.post(url, json=fields)
    assert r.status_code == 201, r.text
    return r.json()


def slugs(client, url, **params):
    r = client.get(url, params=params)
    assert r.status_code == 200, r.text
    return [item["slug"] for item in r.json()["data"]]


def test_draft_hidden_until_published(user_client):
    post = create(user_client, POSTS, title="Hello", slug="hello", status="draft")
    assert post["published_at"] is None

    assert "hello" not in slugs(user_client, POSTS, status="published")
    assert slugs(user_client, POSTS, status="draft") == ["hello"]

    r = user_client.put(f"{POSTS}{post['id']}", json={"status": "published"})
    assert r.status_code == 200
    assert r.json()["published_at"] is not None

    assert slugs(user_client, POSTS, status="published") == ["hello"]
    assert slugs(user_client, POSTS, status="draft") == []


def test_leaving_published_clears_timestamp(user_client):
    post = create(user_client, POSTS, title="Live", slug="live", status="published")
    assert post["published_at"] is not None

    r = user_client.put(f"{POSTS}{post['id']}", json={"status": "archived"})
    assert r.json()["published_at"] is None

    # Other edits leave it alone
    r = user_client.put(f"{POSTS}{post['id']}", json={"title": "Still archived"})
    assert r.json()["status"] == "archived"
    assert r.json()["published_at"] is None


def test_list_joins_author_and_category(user_client, regular_user):
    category = user_client.post("/api/v1/categories/", json={"name": "News"}).json()
    create(user_client, POSTS, title="Filed", slug="filed", category_id=category["id"])
    create(user_client, POSTS, title="Loose", slug="loose")

    body = user_client.get(POSTS).json()
    by_slug = {item["slug"]: item for item in body["data"]}
    assert by_slug["filed"]["author_name"] == regular_user.name
    assert by_slug["filed"]["category_name"] == "News"
    assert by_slug["loose"]["category_name"] is None
    assert body["pagination"]["total"] == 2


def test_created_post_listed_once_newest_first(user_client):
    for i in range(3):
        create(user_client, POSTS, title=f"Post {i}", slug=f"post-{i}")
    assert slugs(user_client, POSTS) == ["post-2", "post-1", "post-0"]


def test_title_filter(user_client):
    create(user_client, POSTS, title="Python tips", slug="py")
    create(user_client, POSTS, title="Gardening", slug="garden")
    assert slugs(user_client, POSTS, title="Python") == ["py"]


def test_kinds_are_isolated(user_client):
    page = create(user_client, PAGES, title="About", slug="about")
    product = create(user_client, PRODUCTS, title="Mug", slug="mug", meta={"price": 12})
    assert page["type"] == "page"
    assert product["meta"] == {"price": 12}

    assert slugs(user_client, POSTS) == []
    assert slugs(user_client, PAGES) == ["about"]
    assert slugs(user_client, PRODUCTS) == ["mug"]

    r = user_client.get(f"{POSTS}{page['id']}")
    assert r.status_code == 404
    assert r.json()["detail"] == "Post not found"
    assert user_client.delete(f"{PRODUCTS}{page['id']}").json()["detail"] == "Product not found"
    assert user_client.get(f"{PAGES}{page['id']}").json()["title"] == "About"


def test_slug_unique_across_kinds(user_client):
    create(user_client, PAGES, title="About", slug="about")
    r = user_client.post(POSTS, json={"title": "About us", "slug": "about"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Slug already exists"


def test_update_slug_conflict_excludes_self(user_client):
    first = create(user_client, POSTS, title="First", slug="first")
    create(user_client, POSTS, title="Second", slug="second")

    r = user_client.put(f"{POSTS}{first['id']}", json={"slug": "first", "title": "First!"})
    assert r.status_code == 200
    r = user_client.put(f"{POSTS}{first['id']}", json={"slug": "second"})
    assert r.status_code == 400


def test_unknown_category_rejected(user_client):
    r = user_client.post(POSTS, json={"title": "X", "slug": "x", "category_id": 999})
    assert r.status_code == 400
    assert r.json()["detail"] == "Category not found"


def test_delete(user_client):
    post = create(user_client, POSTS, title="Gone", slug="gone")
    assert user_client.delete(f"{POSTS}{post['id']}").json() == {"id": post["id"]}
    assert user_client.get(f"{POSTS}{post['id']}").status_code == 404
    assert user_client.delete(f"{POSTS}{post['id']}").status_code == 404


def test_content_requires_auth(client):
    assert client.get(POSTS).status_code == 401
    assert client.post(PAGES, json={"title": "A", "slug": "a"}).status_code == 401


def test_invalid_status_filter(user_client):
    assert user_client.get(POSTS, params={"status": "bogus"}).status_code == 422
