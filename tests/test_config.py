from hn_distill import config


def test_config_workflow(isolated_config):
    # 1. Load non-existent config
    assert config.load_config() == {}
    assert config.get_max_comments() is None

    # 2. Save config
    config.save_config("max_comments", 500)
    assert (isolated_config / "config.json").exists()

    # 3. Load config
    assert config.load_config()["max_comments"] == 500
    assert config.get_max_comments() == 500

    # 4. Save another key
    config.save_config("note", "kept")
    assert config.load_config()["note"] == "kept"
    assert config.get_max_comments() == 500


def test_load_corrupt_config(isolated_config):
    isolated_config.mkdir(parents=True)
    (isolated_config / "config.json").write_text("invalid json{")

    assert config.load_config() == {}


def test_non_object_config_is_empty(isolated_config):
    isolated_config.mkdir(parents=True)
    (isolated_config / "config.json").write_text("[1, 2]")

    assert config.load_config() == {}


def test_unusable_saved_budget_ignored():
    for bad in (0, -5, "200", True, 2.5):
        config.save_config("max_comments", bad)
        assert config.get_max_comments() is None
