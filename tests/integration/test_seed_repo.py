import sqlite3
from datetime import datetime

import pytest

from src.adapters.store.database import Database
from src.adapters.store.repos import SQLSeedRepo
from src.adapters.store.schema import SchemaInitializer
from src.components.install.errors import InvalidIdentifierError, SeedError
from src.domain.entities import Post, Setting, Tag, User


@pytest.fixture
def repo(tmp_path):
    conn = sqlite3.connect(tmp_path / "repo.db")
    conn.execute("PRAGMA foreign_keys = ON;")
    db = Database(conn, "sqlite", "fp_", "qmark", sqlite3.Error, sqlite3.IntegrityError)
    SchemaInitializer().reset_tables(db)
    yield SQLSeedRepo(db)
    db.close()


def make_user(slug="jane-doe"):
    return User(slug=slug, name="Jane Doe", email="jane@example.com", password_hash="h")


def test_settings_round_trip(repo):
    repo.add_settings([Setting(name="title", value="A Fernpress Blog"), Setting(name="a", value="")])

    assert repo.list_settings() == {"title": "A Fernpress Blog", "a": ""}
    assert repo.get_setting("title") == "A Fernpress Blog"
    assert repo.get_setting("missing") is None


def test_duplicate_setting_is_seed_error(repo):
    repo.add_settings([Setting(name="title", value="x")])

    with pytest.raises(SeedError):
        repo.add_settings([Setting(name="title", value="y")])


def test_create_and_read_user(repo):
    user = make_user()
    repo.create_user(user)

    loaded = repo.get_user_by_slug("jane-doe")
    assert loaded == user
    assert repo.get_user_by_slug("nobody") is None
    assert repo.count_users() == 1


@pytest.mark.parametrize("slug", ["admin", "api", "tag", ""])
def test_reserved_slug_rejected(repo, slug):
    with pytest.raises(InvalidIdentifierError):
        repo.create_user(make_user(slug))
    assert repo.count_users() == 0


def test_duplicate_slug_is_invalid_identifier(repo):
    repo.create_user(make_user())

    with pytest.raises(InvalidIdentifierError) as excinfo:
        repo.create_user(make_user())

    assert excinfo.value.fields == ("username",)


def test_post_with_tags(repo):
    repo.create_user(make_user())
    repo.create_tag(Tag(slug="getting-started", name="Getting Started"))
    post = Post(
        slug="hello",
        title="Hello",
        content="<p>Hi</p>",
        author="jane-doe",
        status="published",
        tags=["getting-started"],
        sticky=True,
        pub_date=datetime(2016, 7, 27, 22, 50),
    )

    repo.create_post(post)

    [loaded] = repo.list_posts()
    assert loaded.slug == "hello"
    assert loaded.tags == ["getting-started"]
    assert loaded.sticky is True
    assert loaded.pub_date == datetime(2016, 7, 27, 22, 50)


def test_post_with_unknown_tag(repo):
    repo.create_user(make_user())
    post = Post(
        slug="hello",
        title="Hello",
        content="",
        author="jane-doe",
        tags=["nope"],
        pub_date=datetime(2016, 7, 27),
    )

    with pytest.raises(SeedError):
        repo.create_post(post)
    assert repo.list_posts() == []


def test_post_by_unknown_author_violates_foreign_key(repo):
    post = Post(slug="orphan", title="Orphan", content="", author="ghost", pub_date=datetime(2016, 1, 1))

    with pytest.raises(SeedError):
        repo.create_post(post)
