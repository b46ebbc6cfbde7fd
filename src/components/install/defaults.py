"""
Baseline records written by the installer.

Settings, the starter tag and the starter posts. Post bodies live as HTML
files in ``data/`` next to this module.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from src.domain.entities import Setting

DEFAULTS_DIR = Path(__file__).parent / "data"

CONFIG_TEMPLATE = DEFAULTS_DIR / "database.yaml.tmpl"
ACCESS_FILE_TEMPLATE = DEFAULTS_DIR / "default.htaccess"

# Folders (relative to the deployment root) that must be read/write capable.
FOLDERS = (
    "backups",
    "content",
    "content/cache",
    "content/themes",
    "content/uploads",
)

ALLOWED_UPLOAD_TYPES = (
    "pdf,doc,docx,ppt,pptx,pps,ppsx,odt,xls,xlsx,psd,txt,md,csv,jpg,jpeg,png,gif,ico,svg,"
    "mp3,m4a,ogg,wav,mp4,m4v,mov,wmv,avi,mpg,ogv,3gp,3g2"
)

MAINTENANCE_MESSAGE = (
    "<p>Sorry for the inconvenience but we&rsquo;re performing some maintenance at the "
    "moment. We&rsquo;ll be back online shortly!</p><p>&mdash; The Team</p>"
)

# Static settings; auth_key is generated per install.
STATIC_SETTINGS: tuple[tuple[str, str], ...] = (
    ("allowed_upload_types", ALLOWED_UPLOAD_TYPES),
    ("cover", "source/assets/img/ferns.jpg"),
    ("default_content", "Start writing here..."),
    ("default_title", "Untitled Post"),
    ("favicon", "source/assets/img/logo-color.png"),
    ("foot_code", ""),
    ("frag_admin", "admin"),
    ("frag_author", "author"),
    ("frag_blog", "blog"),
    ("frag_feed", "feed"),
    ("frag_page", "page"),
    ("frag_search", "search"),
    ("frag_tag", "tag"),
    ("generator", "on"),
    ("hbs_cache", "on"),
    ("head_code", ""),
    ("homepage", ""),
    ("language", "en-us"),
    ("logo", "source/assets/img/logo-color.png"),
    ("maintenance", "off"),
    ("maintenance_message", MAINTENANCE_MESSAGE),
    ("navigation", '[{"label":"Home","link":"/"}]'),
    ("posts_per_page", "10"),
    ("tagline", "Go forth and create!"),
    ("theme", "range"),
    ("timezone", "America/New_York"),
    ("title", "A Fernpress Blog"),
    ("twitter", ""),
    ("password_min_length", "8"),
    ("mailer", "default"),
)

# Usernames that would shadow a URL fragment.
RESERVED_SLUGS = frozenset(
    {value for name, value in STATIC_SETTINGS if name.startswith("frag_")} | {"api"}
)


def default_settings() -> list[Setting]:
    """Every default setting, including a fresh random auth key."""
    settings = [Setting(name="auth_key", value=secrets.token_hex(32))]
    settings.extend(Setting(name=name, value=value) for name, value in STATIC_SETTINGS)
    return settings


@dataclass(frozen=True)
class TagSeed:
    slug: str
    name: str
    description: str
    type: str = "post"


@dataclass(frozen=True)
class PostSeed:
    slug: str
    title: str
    body_file: str
    image: str
    sticky: bool = False

    def read_body(self) -> str:
        return (DEFAULTS_DIR / self.body_file).read_text(encoding="utf-8")


DEFAULT_TAG = TagSeed(
    slug="getting-started",
    name="Getting Started",
    description=(
        "This is a sample tag. You can delete it, rename it, or do whatever you want with it!"
    ),
)

POST_PUB_DATE = datetime(2016, 7, 27, 22, 50, 0)
POST_STATUS = "published"

DEFAULT_POSTS = (
    PostSeed(
        slug="welcome-to-fernpress",
        title="Welcome to Fernpress",
        body_file="post.welcome.html",
        image="content/uploads/2016/10/ferns.jpg",
        sticky=True,
    ),
    PostSeed(
        slug="the-editor",
        title="The Editor",
        body_file="post.editor.html",
        image="content/uploads/2016/10/sunflower.jpg",
    ),
    PostSeed(
        slug="themes-and-plugins",
        title="Themes & Plugins",
        body_file="post.themes.html",
        image="content/uploads/2016/10/autumn.jpg",
    ),
    PostSeed(
        slug="help-and-support",
        title="Help & Support",
        body_file="post.support.html",
        image="content/uploads/2016/10/ladybug.jpg",
    ),
)
