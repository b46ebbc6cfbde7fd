"""
Seed Data Loader.

Inserts the baseline state in a fixed order: settings, owner, starter tag,
starter posts. Later readers assume every setting exists before the owner
does, so settings always go first.
"""

from __future__ import annotations

import logging

from src.domain.entities import Post, Tag, User

from .defaults import DEFAULT_POSTS, DEFAULT_TAG, POST_PUB_DATE, POST_STATUS, default_settings
from .errors import InvalidIdentifierError, SeedError
from .models import InstallInput
from .ports import AuthAdapterPort, SeedRepoPort, TimePort

logger = logging.getLogger(__name__)


def seed_settings(repo: SeedRepoPort) -> None:
    settings = default_settings()
    try:
        repo.add_settings(settings)
    except SeedError as exc:
        raise SeedError(f"Unable to insert default settings: {exc.message}") from exc
    logger.info("Inserted %d default settings", len(settings))


def seed_owner(
    repo: SeedRepoPort,
    inp: InstallInput,
    auth_adapter: AuthAdapterPort,
    time: TimePort,
) -> User:
    owner = User(
        slug=inp.username,
        name=inp.name,
        email=inp.email,
        password_hash=auth_adapter.hash_password(inp.password),
        role="owner",
        created_at=time.now_utc(),
    )
    try:
        repo.create_user(owner)
    except InvalidIdentifierError:
        raise
    except SeedError as exc:
        raise SeedError(f"Unable to create the owner user: {exc.message}") from exc
    logger.info("Created owner %s", owner.slug)
    return owner


def seed_tag(repo: SeedRepoPort, time: TimePort) -> Tag:
    tag = Tag(
        slug=DEFAULT_TAG.slug,
        name=DEFAULT_TAG.name,
        description=DEFAULT_TAG.description,
        type="post",
        created_at=time.now_utc(),
    )
    try:
        repo.create_tag(tag)
    except SeedError as exc:
        raise SeedError(f"Unable to insert default tags: {exc.message}") from exc
    return tag


def seed_posts(repo: SeedRepoPort, owner: User, tag: Tag, time: TimePort) -> list[Post]:
    posts: list[Post] = []
    try:
        for seed in DEFAULT_POSTS:
            post = Post(
                slug=seed.slug,
                title=seed.title,
                content=seed.read_body(),
                author=owner.slug,
                image=seed.image,
                status=POST_STATUS,
                tags=[tag.slug],
                sticky=seed.sticky,
                pub_date=POST_PUB_DATE,
                created_at=time.now_utc(),
            )
            repo.create_post(post)
            posts.append(post)
    except (SeedError, OSError) as exc:
        detail = exc.message if isinstance(exc, SeedError) else str(exc)
        raise SeedError(f"Unable to insert default posts: {detail}") from exc
    logger.info("Inserted %d default posts", len(posts))
    return posts


def seed_defaults(
    repo: SeedRepoPort,
    inp: InstallInput,
    auth_adapter: AuthAdapterPort,
    time: TimePort,
) -> User:
    """
    Insert every baseline record.

    Args:
        repo: Insert-only repository bound to the probed connection.
        inp: Validated install input (username already canonical).
        auth_adapter: Hashes the owner's password.
        time: Clock for created timestamps.

    Returns:
        The owner user.

    Raises:
        InvalidIdentifierError: the owner's slug is reserved or taken.
        SeedError: any other insertion failure.
    """
    seed_settings(repo)
    owner = seed_owner(repo, inp, auth_adapter, time)
    tag = seed_tag(repo, time)
    seed_posts(repo, owner, tag, time)
    return owner
