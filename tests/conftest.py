import pytest

from hn_distill import config, constants
from hn_distill.models import Item


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep saved defaults out of the real home directory."""
    config_dir = tmp_path / ".config" / "hn_distill"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_FILE", config_dir / "config.json")
    yield config_dir


@pytest.fixture
def make_comment():
    def factory(item_id, parent, kids=(), by="alice", text="hello", time=1_700_000_000, **extra):
        return Item(
            id=item_id,
            type=extra.pop("type", "comment"),
            by=by,
            time=time,
            text=text,
            parent=parent,
            kids=tuple(kids),
            **extra,
        )

    return factory


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch):
    """Retried requests go out back to back."""
    monkeypatch.setattr(constants, "ITEM_RETRY_DELAY", 0)
