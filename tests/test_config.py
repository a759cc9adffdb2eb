import pytest

from _01_oracle.exceptions import InvalidConfigError
from _02_search.config import DEFAULT_EXPLORATION, SearchConfig, load_config, load_config_from_yaml, search_section


def test_defaults():
    config = SearchConfig()

    assert config.exploration == DEFAULT_EXPLORATION == 1.414
    assert config.seed is None
    assert config.backpropagate_terminal is False


@pytest.mark.parametrize("exploration", [0.0, -1.0])
def test_non_positive_exploration_is_rejected(exploration):
    with pytest.raises(InvalidConfigError):
        SearchConfig(exploration=exploration)


def test_from_dict_ignores_unknown_keys(caplog):
    config = SearchConfig.from_dict({"exploration": 0.7, "seed": 3, "rollout_policy": "greedy"})

    assert config == SearchConfig(exploration=0.7, seed=3)
    assert "rollout_policy" in caplog.text


def test_load_config_reads_nested_search_section(tmp_path):
    path = tmp_path / "search.yaml"
    path.write_text("search:\n  exploration: 2.0\n  backpropagate_terminal: true\n")

    config = load_config(path)

    assert config.exploration == 2.0
    assert config.backpropagate_terminal is True


def test_load_config_reads_top_level_keys(tmp_path):
    path = tmp_path / "flat.yaml"
    path.write_text("seed: 17\n")

    assert load_config(path) == SearchConfig(seed=17)


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert load_config_from_yaml(path) == {}
    assert load_config(path) == SearchConfig()


def test_missing_file_is_config_error(tmp_path):
    with pytest.raises(InvalidConfigError):
        load_config(tmp_path / "nope.yaml")


def test_non_mapping_yaml_is_config_error(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")

    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_invalid_yaml_is_config_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("search: [unclosed\n")

    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_shipped_config_loads():
    from pathlib import Path

    path = Path(__file__).resolve().parent.parent / "configs" / "search.yaml"

    assert load_config(path) == SearchConfig()


@pytest.mark.parametrize("exploration", ["high", None, True, [1.0]])
def test_non_numeric_exploration_is_rejected(exploration):
    with pytest.raises(InvalidConfigError):
        SearchConfig.from_dict({"exploration": exploration})


def test_integer_exploration_is_accepted():
    assert SearchConfig(exploration=2).exploration == 2


@pytest.mark.parametrize("seed", ["7", 1.5, True])
def test_non_integer_seed_is_rejected(seed):
    with pytest.raises(InvalidConfigError):
        SearchConfig(seed=seed)


@pytest.mark.parametrize("flag", ["yes", 1, None])
def test_non_bool_backpropagate_terminal_is_rejected(flag):
    with pytest.raises(InvalidConfigError):
        SearchConfig(backpropagate_terminal=flag)


def test_bad_value_in_yaml_is_config_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("search:\n  exploration: high\n")

    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_search_section_unwrapping():
    assert search_section({"seed": 1}) == {"seed": 1}
    assert search_section({"search": {"seed": 2}}) == {"seed": 2}
    assert search_section({"search": None}) == {}


def test_search_section_must_be_mapping():
    with pytest.raises(InvalidConfigError):
        search_section({"search": 5})


def test_empty_search_section_gives_defaults(tmp_path):
    path = tmp_path / "empty_section.yaml"
    path.write_text("search:\n")

    assert load_config(path) == SearchConfig()
