"""
End-to-end install against a real SQLite database and a temporary deployment root.
"""

from src.app_shell.config import is_installed, load_database_config
from src.app_shell.context import create_install_ports
from src.components.install import InstallInput, Stage, run_install
from src.components.install.defaults import DEFAULT_POSTS, FOLDERS

SECRET_KEY = "integration-secret"


def test_full_install(deploy_root, install_form, install_ports, session_store, query):
    outcome = run_install(
        InstallInput.from_form(install_form), install_ports, base_url="http://blog.test"
    )

    assert outcome.success is True, outcome.message
    assert outcome.redirect == "http://blog.test/admin"
    assert outcome.token
    assert session_store.get(outcome.token) is not None

    # Filesystem contract
    for folder in FOLDERS:
        assert (deploy_root / folder).is_dir()
    assert (deploy_root / ".htaccess").exists()

    # Committed config
    assert is_installed(deploy_root)
    config = load_database_config(deploy_root)
    assert config.driver == "sqlite"
    assert config.database == "fernpress.db"
    assert config.prefix == "fp_"

    # Seed data
    [user] = query('SELECT * FROM "fp_users"')
    assert user["slug"] == "jane-doe"
    assert user["name"] == "Jane Doe"
    assert user["role"] == "owner"
    assert user["password"].startswith("$argon2")

    posts = query('SELECT slug, sticky, status, author, pub_date FROM "fp_posts" ORDER BY rowid')
    assert [p["slug"] for p in posts] == [seed.slug for seed in DEFAULT_POSTS]
    assert [p["sticky"] for p in posts] == [1, 0, 0, 0]
    assert {p["status"] for p in posts} == {"published"}
    assert {p["author"] for p in posts} == {"jane-doe"}
    assert {p["pub_date"] for p in posts} == {"2016-07-27 22:50:00"}

    tags = query('SELECT slug FROM "fp_tags"')
    assert tags == [{"slug": "getting-started"}]
    assert len(query('SELECT * FROM "fp_post_tags"')) == 4

    settings = {row["name"]: row["value"] for row in query('SELECT * FROM "fp_settings"')}
    assert len(settings) == 31
    assert settings["frag_admin"] == "admin"
    assert len(settings["auth_key"]) == 64


def test_second_install_changes_nothing(deploy_root, install_form, install_ports, query):
    first = run_install(InstallInput.from_form(install_form), install_ports)
    assert first.success is True

    config_before = (deploy_root / "database.yaml").read_text()
    users_before = query('SELECT * FROM "fp_users"')
    settings_before = query('SELECT * FROM "fp_settings" ORDER BY name')
    schema_before = query("SELECT name, sql FROM sqlite_master ORDER BY name")

    other = dict(install_form, username="someone-else", email="else@example.com")
    second = run_install(InstallInput.from_form(other), install_ports)

    assert second.success is False
    assert second.stage is Stage.COMMITTING_CONFIG
    assert (deploy_root / "database.yaml").read_text() == config_before
    assert query('SELECT * FROM "fp_users"') == users_before
    assert query('SELECT * FROM "fp_settings" ORDER BY name') == settings_before
    assert query("SELECT name, sql FROM sqlite_master ORDER BY name") == schema_before


def test_reserved_username_then_retry(deploy_root, install_form, install_ports, query):
    failed = run_install(
        InstallInput.from_form(dict(install_form, username="Admin")), install_ports
    )

    assert failed.success is False
    assert failed.stage is Stage.SEEDING_DATA
    assert failed.invalid == ("username",)
    assert failed.message == "This username is reserved and cannot be used."
    assert not is_installed(deploy_root)

    retry = run_install(InstallInput.from_form(install_form), install_ports)

    assert retry.success is True, retry.message
    assert is_installed(deploy_root)
    assert [u["slug"] for u in query('SELECT slug FROM "fp_users"')] == ["jane-doe"]
    assert len(query('SELECT * FROM "fp_settings"')) == 31


def test_missing_database_fails_before_touching_disk(deploy_root, install_form, install_ports):
    outcome = run_install(
        InstallInput.from_form(dict(install_form, **{"db-database": "nope.db"})),
        install_ports,
    )

    assert outcome.stage is Stage.PROBING_CONNECTIVITY
    assert outcome.invalid == ("db-database",)
    assert not (deploy_root / "content").exists()
    assert not is_installed(deploy_root)


def test_validation_errors_reported_together(deploy_root, install_form, install_ports):
    form = dict(install_form, email="", password="abcde")

    outcome = run_install(InstallInput.from_form(form), install_ports)

    assert outcome.to_response() == {
        "success": False,
        "invalid": ["email", "password"],
        "message": "Please correct the highlighted errors.",
    }
    assert not (deploy_root / ".htaccess").exists()


def test_concurrent_install_is_refused(deploy_root, install_form, install_ports):
    holder = create_install_ports(deploy_root, SECRET_KEY).lock
    holder.acquire()
    try:
        outcome = run_install(InstallInput.from_form(install_form), install_ports)
    finally:
        holder.release()

    assert outcome.stage is Stage.PROBING_CONNECTIVITY
    assert outcome.message == "Another installation is already in progress."
    assert not is_installed(deploy_root)


def test_root_under_a_plain_file_is_reported(tmp_path, install_form):
    (tmp_path / "afile").write_text("not a directory")
    root = tmp_path / "afile" / "site"

    outcome = run_install(
        InstallInput.from_form(install_form), create_install_ports(root, SECRET_KEY)
    )

    assert outcome.success is False
    assert outcome.stage is Stage.PROBING_CONNECTIVITY
    assert outcome.to_response()["invalid"] is None
    assert str(root) in outcome.message
