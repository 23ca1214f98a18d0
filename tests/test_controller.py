# test_controller.py

import pytest
import asyncio
from unittest.mock import Mock, patch

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from viewtween.config import ScrollConfig
from viewtween.controller import ScrollController
from viewtween.host import MemoryHost
from viewtween.scheduler import FrameLoop
from viewtween.tween import TweenState, ViewTween


async def settle(controller, timeout=2.0):
    """Wait until no tween is live and no scroll request is queued."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    await asyncio.sleep(0.01)
    while controller.tweens or controller.scroll.pending:
        if loop.time() > deadline:
            raise AssertionError(f"Scrolling did not settle: {controller.tweens}")
        await asyncio.sleep(0.01)


class TestScrollController:

    def setup_method(self):
        self.host = MemoryHost()
        self.vid = self.host.add_viewport(line_count=200, height=20, scrolloff=2)
        self.config = ScrollConfig(duration=200, max_framerate=1000, scroll_throttle=0)
        self.controller = ScrollController(self.host, self.config)

    def view(self):
        return self.host.get_view(self.vid)

    @pytest.mark.asyncio
    async def test_scroll_reaches_target(self):
        self.controller.scroll(self.vid, 10)
        await asyncio.sleep(0)
        tween = self.controller.tweens[self.vid]

        await settle(self.controller)

        view = self.view()
        assert view.top_line == 11
        assert 13 <= view.cursor_line <= 28
        assert tween.state == TweenState.ARRIVED
        assert self.controller.loops == {}

    @pytest.mark.asyncio
    async def test_current_viewport_by_default(self):
        self.controller.scroll(0, 5)
        await settle(self.controller)

        assert self.view().top_line == 6

    @pytest.mark.asyncio
    async def test_fractional_delta_is_rounded(self):
        self.controller.scroll(self.vid, 4.5)
        await settle(self.controller)

        assert self.view().top_line == 6

    @pytest.mark.asyncio
    async def test_live_tween(self):
        self.controller.scroll(self.vid, 40)
        await asyncio.sleep(0.02)

        tween = self.controller.live_tween(self.vid)
        assert isinstance(tween, ViewTween)
        assert isinstance(self.controller.loops[self.vid], FrameLoop)

        await settle(self.controller)
        assert self.controller.live_tween(self.vid) is None

    @pytest.mark.asyncio
    async def test_second_request_continues_from_current_position(self):
        self.controller.scroll(self.vid, 60)
        await asyncio.sleep(0.1)
        first = self.controller.tweens[self.vid]
        top = self.view().top_line

        self.controller.scroll(self.vid, -10)
        await asyncio.sleep(0)
        second = self.controller.tweens[self.vid]

        assert second is not first
        assert first.state == TweenState.CANCELLED
        assert second.folds is first.folds
        assert second.orig_top_line == top
        assert second.target_line == max(top - 10, 1)
        assert second.animation.progression_fn is self.config.continuation_fn

        await settle(self.controller)
        assert self.view().top_line == second.target_line

    @pytest.mark.asyncio
    async def test_fresh_request_uses_progression_curve(self):
        self.controller.scroll(self.vid, 10)
        await asyncio.sleep(0)

        tween = self.controller.tweens[self.vid]
        assert tween.animation.progression_fn is self.config.progression_fn
        assert tween.animation.duration == 200

        await settle(self.controller)

    @pytest.mark.asyncio
    async def test_explicit_duration(self):
        self.controller.scroll(self.vid, 10, 80)
        await asyncio.sleep(0)

        assert self.controller.tweens[self.vid].animation.duration == 80
        await settle(self.controller)

    @pytest.mark.asyncio
    async def test_rapid_requests_are_coalesced(self):
        config = ScrollConfig(duration=200, max_framerate=1000)
        controller = ScrollController(self.host, config)

        with patch.object(controller, 'start', wraps=controller.start) as start:
            controller.scroll(self.vid, 5)
            controller.scroll(self.vid, 5)
            controller.scroll(self.vid, 5)
            await settle(controller)

        assert start.call_count == 2

    @pytest.mark.asyncio
    async def test_tab_switch_snaps_to_target(self):
        self.controller.scroll(self.vid, 40)
        await asyncio.sleep(0.02)
        tween = self.controller.tweens[self.vid]

        self.host.add_viewport(line_count=10, height=5, tab=2)
        self.host.switch_tab(2)
        await settle(self.controller)

        assert self.view().top_line == 41
        assert tween.state == TweenState.DETACHED
        assert self.controller.tweens == {}
        assert self.controller.loops == {}

    @pytest.mark.asyncio
    async def test_viewport_closed_mid_flight(self):
        self.controller.scroll(self.vid, 40)
        await asyncio.sleep(0.02)
        tween = self.controller.tweens[self.vid]

        self.host.close_viewport(self.vid)
        await settle(self.controller)

        assert tween.state == TweenState.DETACHED
        assert self.controller.tweens == {}

    @pytest.mark.asyncio
    async def test_unknown_viewport_is_dropped(self):
        logger = Mock()
        controller = ScrollController(self.host, self.config, logger=logger)

        controller.scroll(9999, 5)
        await asyncio.sleep(0.01)

        assert controller.tweens == {}
        assert any("9999" in call.args[0] for call in logger.debug.call_args_list)

    @pytest.mark.asyncio
    async def test_cancel_stops_in_place(self):
        self.controller.scroll(self.vid, 100)
        await asyncio.sleep(0.05)
        tween = self.controller.tweens[self.vid]

        self.controller.cancel(self.vid)
        top = self.view().top_line
        await asyncio.sleep(0.05)

        assert tween.state == TweenState.CANCELLED
        assert self.view().top_line == top
        assert self.controller.tweens == {}
        assert self.controller.loops == {}

    @pytest.mark.asyncio
    async def test_close_cancels_everything(self):
        other = self.host.add_viewport(line_count=200, height=20)

        self.controller.scroll(self.vid, 100)
        await asyncio.sleep(0.01)
        self.controller.scroll(other, 100)
        await asyncio.sleep(0.01)
        tweens = list(self.controller.tweens.values())

        self.controller.close()

        assert len(tweens) == 2
        assert all(t.state == TweenState.CANCELLED for t in tweens)
        assert self.controller.tweens == {}

        self.controller.scroll(self.vid, 5)
        await asyncio.sleep(0.01)
        assert self.controller.tweens == {}

    @pytest.mark.asyncio
    async def test_close_drops_request_already_queued(self):
        self.controller.scroll(self.vid, 30)
        self.controller.close()
        await asyncio.sleep(0.3)

        assert self.view().top_line == 1
        assert self.controller.tweens == {}
        assert self.controller.loops == {}

    @pytest.mark.asyncio
    async def test_start_prebuilt_tween(self):
        tween = ViewTween(self.host, self.vid, target_line=30, duration=50)

        loop = self.controller.start(tween)
        assert self.controller.tweens[self.vid] is tween
        assert loop.frames == 1

        await settle(self.controller)
        assert self.view().top_line == 30
