import pytest
from pydantic import ValidationError

from theorunner.engine.tuning import CLASSIC, NIGHT, SpawnCategory, Tuning, get_tuning
from theorunner.settings import DisplaySettings, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("THEO_DEBUG", "THEO_GAME__TUNING", "THEO_GAME__REDUCED_MOTION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)  # keep any local .env out of the way


def test_defaults() -> None:
    settings = Settings()
    assert not settings.debug
    assert settings.display.field_width == 800
    assert settings.game.tuning == "classic"
    assert settings.tuning is CLASSIC
    assert settings.game.best_score_path.name == "best_score.json"


def test_env_selects_preset(monkeypatch) -> None:
    monkeypatch.setenv("THEO_GAME__TUNING", "night")
    monkeypatch.setenv("THEO_GAME__REDUCED_MOTION", "true")

    settings = Settings()

    assert settings.tuning is NIGHT
    assert settings.game.reduced_motion


def test_dotenv_file_is_read(tmp_path) -> None:
    (tmp_path / ".env").write_text("THEO_DEBUG=true\n")
    assert Settings().debug


def test_unknown_preset_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("THEO_GAME__TUNING", "hard")
    with pytest.raises(ValidationError):
        Settings()


def test_display_bounds() -> None:
    with pytest.raises(ValidationError):
        DisplaySettings(field_width=0)
    with pytest.raises(ValidationError):
        DisplaySettings(scale=9)


def test_presets_by_name() -> None:
    assert get_tuning("classic") is CLASSIC
    assert get_tuning("night") is NIGHT
    with pytest.raises(ValueError):
        get_tuning("nightmare")


def test_night_also_drops_bare_cans() -> None:
    weights = dict(NIGHT.category_weights)
    assert weights[SpawnCategory.COLLECTIBLE] > 0
    assert NIGHT.max_speed < CLASSIC.max_speed


@pytest.mark.parametrize("overrides", [
    {"gravity": 0},
    {"jump_force": 3},
    {"base_speed": 13},
    {"speed_increment": -0.1},
    {"min_gap": 500},
    {"collectible_chance": 1.5},
    {"score_divisor": 0},
    {"category_weights": ((SpawnCategory.TUNNEL, -1.0), (SpawnCategory.OBSTACLE, 2.0))},
    {"category_weights": ((SpawnCategory.TUNNEL, 0.0), (SpawnCategory.OBSTACLE, 0.0))},
])
def test_invalid_tuning_is_rejected(overrides) -> None:
    with pytest.raises(ValueError):
        Tuning(**overrides)
