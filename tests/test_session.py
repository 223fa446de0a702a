from sqlalchemy import text

from pos.db import session as db_session
from tests.conftest import make_config


def test_default_session_is_built_from_config_on_first_use(tmp_path, monkeypatch):
    db_file = tmp_path / "nested" / "pos.db"
    monkeypatch.setattr(db_session, "load_env", lambda: make_config(database_url=f"sqlite:///{db_file}"))
    monkeypatch.setattr(db_session, "_default_factory", None)

    assert not db_file.parent.exists()
    with db_session.get_session() as session:
        assert session.execute(text("SELECT 1")).scalar() == 1
    assert db_file.exists()

    factory = db_session._default_factory
    with db_session.get_session():
        pass
    assert db_session._default_factory is factory
