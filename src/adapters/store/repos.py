from collections.abc import Sequence
from datetime import datetime
from typing import Any
from uuid import UUID

from src.components.install.defaults import RESERVED_SLUGS
from src.components.install.errors import InvalidIdentifierError, SeedError
from src.domain.entities import Post, Setting, Tag, User

from .database import Database


def parse_dt(s: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    return datetime.fromisoformat(s) if s else None


class SQLSeedRepo:
    """Insert-only repository for the records the installer seeds.

    Works on any driver wrapped by ``Database``. Every write commits on its
    own; driver errors are re-raised as ``SeedError``.
    """

    def __init__(self, db: Database):
        self.db = db

    def _t(self, name: str) -> str:
        return f'"{self.db.table(name)}"'

    def _write(self, query: str, rows: Sequence[Sequence[Any]]) -> None:
        try:
            self.db.execute_many(query, rows)
            self.db.commit()
        except self.db.Error as e:
            self.db.rollback()
            raise SeedError(str(e)) from e

    # --- Settings ---

    def add_settings(self, settings: Sequence[Setting]) -> None:
        self._write(
            f"INSERT INTO {self._t('settings')} (name, value) VALUES (?, ?)",
            [(s.name, s.value) for s in settings],
        )

    def get_setting(self, name: str) -> str | None:
        row = self.db.fetch_one(
            f"SELECT value FROM {self._t('settings')} WHERE name = ?", (name,)
        )
        return row["value"] if row else None

    def list_settings(self) -> dict[str, str]:
        rows = self.db.fetch_all(f"SELECT name, value FROM {self._t('settings')}")
        return {row["name"]: row["value"] for row in rows}

    # --- Users ---

    def create_user(self, user: User) -> None:
        if not user.slug or user.slug in RESERVED_SLUGS:
            raise InvalidIdentifierError(user.slug)

        try:
            self.db.run(
                f"""
                INSERT INTO {self._t('users')} (
                    id, slug, name, email, password, role, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(user.id),
                    user.slug,
                    user.name,
                    user.email,
                    user.password_hash,
                    user.role,
                    user.created_at.isoformat(),
                ),
            )
            self.db.commit()
        except self.db.IntegrityError as e:
            self.db.rollback()
            raise InvalidIdentifierError(user.slug) from e
        except self.db.Error as e:
            self.db.rollback()
            raise SeedError(str(e)) from e

    def get_user_by_slug(self, slug: str) -> User | None:
        row = self.db.fetch_one(f"SELECT * FROM {self._t('users')} WHERE slug = ?", (slug,))
        if not row:
            return None
        return User(
            id=UUID(row["id"]),
            slug=row["slug"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password"],
            role=row["role"],
            created_at=parse_dt(row["created_at"]) or datetime.min,
        )

    def count_users(self) -> int:
        row = self.db.fetch_one(f"SELECT COUNT(*) AS n FROM {self._t('users')}")
        return int(row["n"]) if row else 0

    # --- Tags ---

    def create_tag(self, tag: Tag) -> None:
        self._write(
            f"""
            INSERT INTO {self._t('tags')} (id, slug, name, description, type, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    str(tag.id),
                    tag.slug,
                    tag.name,
                    tag.description,
                    tag.type,
                    tag.created_at.isoformat(),
                )
            ],
        )

    def get_tag_id(self, slug: str) -> str | None:
        row = self.db.fetch_one(f"SELECT id FROM {self._t('tags')} WHERE slug = ?", (slug,))
        return row["id"] if row else None

    # --- Posts ---

    def create_post(self, post: Post) -> None:
        tag_ids = []
        for slug in post.tags:
            try:
                tag_id = self.get_tag_id(slug)
            except self.db.Error as e:
                raise SeedError(str(e)) from e
            if tag_id is None:
                raise SeedError(f"Unknown tag: {slug}")
            tag_ids.append(tag_id)

        try:
            self.db.run(
                f"""
                INSERT INTO {self._t('posts')} (
                    id, slug, title, content, author, image,
                    status, sticky, pub_date, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(post.id),
                    post.slug,
                    post.title,
                    post.content,
                    post.author,
                    post.image,
                    post.status,
                    1 if post.sticky else 0,
                    post.pub_date.isoformat(sep=" "),
                    post.created_at.isoformat(),
                ),
            )
            for tag_id in tag_ids:
                self.db.run(
                    f"INSERT INTO {self._t('post_tags')} (post_id, tag_id) VALUES (?, ?)",
                    (str(post.id), tag_id),
                )
            self.db.commit()
        except self.db.Error as e:
            self.db.rollback()
            raise SeedError(str(e)) from e

    def list_posts(self) -> list[Post]:
        rows = self.db.fetch_all(f"SELECT * FROM {self._t('posts')} ORDER BY pub_date, slug")
        posts = []
        for row in rows:
            tag_rows = self.db.fetch_all(
                f"""
                SELECT t.slug FROM {self._t('tags')} t
                JOIN {self._t('post_tags')} pt ON pt.tag_id = t.id
                WHERE pt.post_id = ?
                ORDER BY t.slug
                """,
                (row["id"],),
            )
            posts.append(
                Post(
                    id=UUID(row["id"]),
                    slug=row["slug"],
                    title=row["title"],
                    content=row["content"],
                    author=row["author"],
                    image=row["image"],
                    status=row["status"],
                    tags=[t["slug"] for t in tag_rows],
                    sticky=bool(row["sticky"]),
                    pub_date=parse_dt(row["pub_date"]) or datetime.min,
                    created_at=parse_dt(row["created_at"]) or datetime.min,
                )
            )
        return posts


def seed_repo_factory(db: Database) -> SQLSeedRepo:
    return SQLSeedRepo(db)
