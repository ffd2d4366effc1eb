import pytest
from sqlconn import Config, DbCon, load_config
from sqlconn.config import DEFAULT_URL


def test_defaults(monkeypatch):
    for name in ('SQLQUERY_DB_URL', 'SQLQUERY_ECHO', 'SQLQUERY_DEBUG', 'SQLQUERY_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    cfg = load_config()
    assert cfg == Config(DB_URL=DEFAULT_URL, ECHO=False, DEBUG=False, LOG_LEVEL='info')


def test_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('SQLQUERY_DB_URL', f'sqlite:///{tmp_path / "x.db"}')
    monkeypatch.setenv('SQLQUERY_DEBUG', 'yes')
    monkeypatch.setenv('SQLQUERY_LOG_LEVEL', 'debug')
    cfg = load_config()
    assert cfg.DEBUG is True
    with DbCon.from_config(cfg) as con:
        assert con.debug is True
        assert con.db == 'sqlite'
        assert con.field('SELECT 1') == 1


@pytest.mark.parametrize('name, value', [
    ('SQLQUERY_DB_URL', 'postgresql://u:p@localhost/db'),
    ('SQLQUERY_LOG_LEVEL', 'loud'),
])
def test_invalid_settings(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_config()
