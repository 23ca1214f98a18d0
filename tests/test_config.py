# test_config.py

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from viewtween.config import ScrollConfig
from viewtween.easing import DEFAULT_CONTINUATION_FN, DEFAULT_PROGRESSION_FN, linear


class TestScrollConfig:

    def test_defaults(self):
        config = ScrollConfig()

        assert config.duration == 250
        assert config.max_framerate == 144
        assert config.frame_interval == pytest.approx(1000 / 144)
        assert config.scroll_throttle_interval == 125
        assert config.progression_fn is DEFAULT_PROGRESSION_FN
        assert config.continuation_fn is DEFAULT_CONTINUATION_FN
        assert not config.logging_enabled

    def test_explicit_throttle(self):
        assert ScrollConfig(scroll_throttle=40).scroll_throttle_interval == 40
        assert ScrollConfig(scroll_throttle=0).scroll_throttle_interval == 0

    def test_throttle_follows_duration(self):
        assert ScrollConfig(duration=500).scroll_throttle_interval == 250

    @pytest.mark.parametrize("kwargs", [
        {'duration': 0},
        {'duration': -10},
        {'max_framerate': 0},
        {'scroll_throttle': -1},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ScrollConfig(**kwargs)

    def test_from_dict(self):
        config = ScrollConfig.from_dict({
            'duration': 300,
            'max_framerate': 60,
            'progression': {'curve': 'linear'},
            'continuation': {'curve': 'ease_out', 'k': 1},
        })

        assert config.duration == 300
        assert config.frame_interval == pytest.approx(1000 / 60)
        assert config.progression_fn is linear
        assert config.continuation_fn(0.5) == pytest.approx(1 - 0.5 ** 3)

    def test_from_dict_keeps_defaults(self):
        config = ScrollConfig.from_dict({})
        assert config == ScrollConfig()

    def test_from_dict_unknown_key(self):
        with pytest.raises(ValueError, match="framerate"):
            ScrollConfig.from_dict({'framerate': 60})

    def test_from_dict_rejects_curve_functions(self):
        with pytest.raises(ValueError):
            ScrollConfig.from_dict({'progression_fn': linear})

    def test_from_dict_bad_curve(self):
        with pytest.raises(ValueError):
            ScrollConfig.from_dict({'progression': {'curve': 'bounce'}})
