from datetime import datetime, timedelta

from siteadmin.models.category import Category
from siteadmin.models.job import Job
from siteadmin.models.post import Post, PostType

URL = "/api/v1/dashboard/stats"


def test_dashboard_is_admin_only(client, user_client):
    assert client.get(URL).status_code == 401
    assert user_client.get(URL).status_code == 403


def test_counts(admin_client, session, regular_user):
    session.add(Post(type=PostType.ARTICLE, title="A", slug="a"))
    session.add(Post(type=PostType.ARTICLE, title="B", slug="b"))
    session.add(Post(type=PostType.PAGE, title="About", slug="about"))
    session.add(Post(type=PostType.PRODUCT, title="Mug", slug="mug"))
    session.add(Job(title="Dev", slug="dev", description="code"))
    session.add(Category(name="News"))
    session.commit()

    counts = admin_client.get(URL).json()["counts"]
    assert counts == {"users": 2, "posts": 2, "pages": 1, "products": 1, "jobs": 1, "categories": 1}


def test_recent_items(admin_client, session, admin_user):
    base = datetime(2024, 1, 1)
    for i in range(7):
        session.add(Post(
            type=PostType.PAGE if i % 2 else PostType.ARTICLE,
            title=f"Post {i}", slug=f"post-{i}",
            author_id=admin_user.id,
            updated_at=base + timedelta(hours=i),
        ))
        session.add(Job(title=f"Job {i}", slug=f"job-{i}", description="x", created_at=base + timedelta(hours=i)))
    session.commit()

    body = admin_client.get(URL).json()
    assert [p["title"] for p in body["recentPosts"]] == ["Post 6", "Post 5", "Post 4", "Post 3", "Post 2"]
    assert body["recentPosts"][0]["author_name"] == "Admin"
    assert body["recentPosts"][1]["type"] == "page"
    assert [j["title"] for j in body["recentJobs"]] == ["Job 6", "Job 5", "Job 4", "Job 3", "Job 2"]
