"""
Tests for environment-driven settings
"""

from kennel.config import Settings
from kennel.graphql import create_engine
from kennel.store import Collection, SequenceIds


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.api_port == 8080
    assert settings.graphql_path == "/graphql"
    assert settings.id_strategy == "count"
    assert settings.seed_data is True
    assert settings.graphiql is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("KENNEL_API_PORT", "9090")
    monkeypatch.setenv("KENNEL_ID_STRATEGY", "sequence")
    monkeypatch.setenv("KENNEL_SEED_DATA", "false")
    monkeypatch.setenv("KENNEL_MEMOIZE_RELATIONSHIPS", "true")

    settings = Settings(_env_file=None)

    assert settings.api_port == 9090
    engine = create_engine(settings=settings)
    assert engine.memoize is True
    assert isinstance(engine.store.id_strategy, SequenceIds)
    assert engine.store.count(Collection.OWNERS) == 0
