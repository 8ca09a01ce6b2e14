import logging
import os

from routedoc.utils import config


def test_parse_bool_values() -> None:
    assert config._parse_bool("YES")
    assert config._parse_bool(" on ")
    assert not config._parse_bool("0")
    assert config._parse_bool(None, default=True)


def test_parse_str_falls_back_on_blank() -> None:
    assert config._parse_str("  ", default="default") == "default"
    assert config._parse_str(" public ", default="default") == "public"


def test_parse_level_accepts_names_and_numbers() -> None:
    assert config._parse_level("debug", default=logging.INFO) == logging.DEBUG
    assert config._parse_level("15", default=logging.INFO) == 15
    assert config._parse_level("chatty", default=logging.INFO) == logging.INFO
    assert config._parse_level(None, default=logging.WARNING) == logging.WARNING


def test_defaults() -> None:
    assert config.DEFAULT_API_ID == "default"
    assert config.DOCS_PATH == "/swagger.json"


def test_load_env_reads_explicit_file_once(tmp_path, monkeypatch) -> None:
    from routedoc.utils import env

    dotenv_file = tmp_path / "routedoc.env"
    dotenv_file.write_text("ROUTEDOC_SAMPLE=from-file\nROUTEDOC_KEPT=from-file\n", encoding="utf-8")
    monkeypatch.setenv("ROUTEDOC_KEPT", "from-process")
    monkeypatch.delenv("ROUTEDOC_SAMPLE", raising=False)
    monkeypatch.setattr(env, "_env_loaded", False)
    monkeypatch.setattr(env, "_loaded_from", None)

    assert env.load_env(dotenv_path=dotenv_file) == dotenv_file
    assert os.environ["ROUTEDOC_SAMPLE"] == "from-file"
    assert os.environ["ROUTEDOC_KEPT"] == "from-process"

    monkeypatch.setenv("ROUTEDOC_SAMPLE", "changed")
    assert env.load_env(dotenv_path=dotenv_file) == dotenv_file
    assert os.environ["ROUTEDOC_SAMPLE"] == "changed"
    monkeypatch.delenv("ROUTEDOC_SAMPLE")
