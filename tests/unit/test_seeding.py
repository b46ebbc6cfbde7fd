from unittest.mock import MagicMock

import pytest

from src.components.install.defaults import (
    DEFAULT_POSTS,
    POST_PUB_DATE,
    RESERVED_SLUGS,
    STATIC_SETTINGS,
    default_settings,
)
from src.components.install.errors import InvalidIdentifierError, SeedError
from src.components.install.models import InstallInput
from src.components.install.seeding import seed_defaults


@pytest.fixture
def owner_input():
    return InstallInput(
        name="Jane Doe",
        email="jane@example.com",
        username="jane-doe",
        password="correct-horse-battery",
    )


@pytest.fixture
def mock_repo():
    return MagicMock()


@pytest.fixture
def mock_auth_adapter():
    adapter = MagicMock()
    adapter.hash_password.return_value = "hashed_password"
    return adapter


def test_seed_order(mock_repo, mock_auth_adapter, owner_input, fake_time):
    seed_defaults(mock_repo, owner_input, mock_auth_adapter, fake_time)

    calls = [name for name, _, _ in mock_repo.method_calls]
    assert calls == ["add_settings", "create_user", "create_tag"] + ["create_post"] * 4


def test_owner_is_hashed(mock_repo, mock_auth_adapter, owner_input, fake_time):
    owner = seed_defaults(mock_repo, owner_input, mock_auth_adapter, fake_time)

    assert owner.slug == "jane-doe"
    assert owner.role == "owner"
    assert owner.password_hash == "hashed_password"
    mock_auth_adapter.hash_password.assert_called_once_with("correct-horse-battery")


def test_posts(mock_repo, mock_auth_adapter, owner_input, fake_time):
    seed_defaults(mock_repo, owner_input, mock_auth_adapter, fake_time)

    posts = [c.args[0] for c in mock_repo.create_post.call_args_list]
    assert [p.slug for p in posts] == [seed.slug for seed in DEFAULT_POSTS]
    assert [p.sticky for p in posts] == [True, False, False, False]
    assert all(p.status == "published" for p in posts)
    assert all(p.author == "jane-doe" for p in posts)
    assert all(p.tags == ["getting-started"] for p in posts)
    assert all(p.pub_date == POST_PUB_DATE for p in posts)
    assert all(p.content for p in posts)


def test_default_settings():
    settings = default_settings()
    names = [s.name for s in settings]

    assert names[0] == "auth_key"
    assert len(settings) == len(STATIC_SETTINGS) + 1 == 31
    assert len(set(names)) == len(names)
    assert len(settings[0].value) == 64
    assert default_settings()[0].value != settings[0].value


def test_reserved_slugs_cover_url_fragments():
    assert {"admin", "author", "blog", "feed", "page", "search", "tag", "api"} == RESERVED_SLUGS


def test_settings_failure_message(mock_repo, mock_auth_adapter, owner_input, fake_time):
    mock_repo.add_settings.side_effect = SeedError("no such table")

    with pytest.raises(SeedError) as excinfo:
        seed_defaults(mock_repo, owner_input, mock_auth_adapter, fake_time)

    assert excinfo.value.message == "Unable to insert default settings: no such table"
    mock_repo.create_user.assert_not_called()


def test_invalid_identifier_passes_through(
    mock_repo, mock_auth_adapter, owner_input, fake_time
):
    mock_repo.create_user.side_effect = InvalidIdentifierError("admin")

    with pytest.raises(InvalidIdentifierError) as excinfo:
        seed_defaults(mock_repo, owner_input, mock_auth_adapter, fake_time)

    assert excinfo.value.fields == ("username",)
    assert excinfo.value.message == "This username is reserved and cannot be used."


def test_owner_failure_message(mock_repo, mock_auth_adapter, owner_input, fake_time):
    mock_repo.create_user.side_effect = SeedError("disk I/O error")

    with pytest.raises(SeedError) as excinfo:
        seed_defaults(mock_repo, owner_input, mock_auth_adapter, fake_time)

    assert excinfo.value.message == "Unable to create the owner user: disk I/O error"
    assert excinfo.value.fields == ()


def test_tag_failure_message(mock_repo, mock_auth_adapter, owner_input, fake_time):
    mock_repo.create_tag.side_effect = SeedError("locked")

    with pytest.raises(SeedError) as excinfo:
        seed_defaults(mock_repo, owner_input, mock_auth_adapter, fake_time)

    assert excinfo.value.message == "Unable to insert default tags: locked"


def test_post_failure_message(mock_repo, mock_auth_adapter, owner_input, fake_time):
    mock_repo.create_post.side_effect = [None, SeedError("constraint failed")]

    with pytest.raises(SeedError) as excinfo:
        seed_defaults(mock_repo, owner_input, mock_auth_adapter, fake_time)

    assert excinfo.value.message == "Unable to insert default posts: constraint failed"
    assert mock_repo.create_post.call_count == 2
