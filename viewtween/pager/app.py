# pager/app.py

from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import HSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

from ..actions import ScrollActions
from ..config import ScrollConfig
from ..controller import ScrollController
from ..logger import Logger
from .document import Document
from .host import PagerHost

PAGER_STYLE = Style.from_dict({
    'line-number': '#777777',
    'fold': '#5fafd7 bold',
    'cursor-line': 'reverse',
    'status': 'reverse',
})


class Pager:
    """
    Full-screen terminal pager with smooth, fold-aware scrolling.

    Key bindings follow Vim: CTRL-D/CTRL-U, CTRL-F/CTRL-B, zt/zb/zz, j/k,
    za/zo/zc for folds, q to quit. A numeric prefix is passed on as count.
    """
    def __init__(
        self,
        document: Document,
        config: Optional[ScrollConfig] = None,
        scrolloff: int = 0,
        open_folds: bool = False,
        logger=None,
        input=None,
        output=None
    ):
        """
        Args:
            document: Document to display
            config: ScrollConfig for the scroll controller
            scrolloff: Scroll-off margin
            open_folds: Start with every marker region open
            logger: Optional Logger
            input: prompt_toolkit input (default: the terminal)
            output: prompt_toolkit output (default: the terminal)
        """
        self.config = config or ScrollConfig()
        self.logger = logger or Logger(__name__, self.config.logging_enabled, self.config.log_file)
        self.document = document
        self.app = None

        self.host = PagerHost(
            document,
            scrolloff=scrolloff,
            open_folds=open_folds,
            on_change=self._invalidate
        )
        self.controller = ScrollController(self.host, self.config, self.logger)
        self.actions = ScrollActions(self.controller)
        self.key_bindings = self._create_key_bindings()

        self.app = Application(
            layout=Layout(HSplit([
                Window(FormattedTextControl(self._text_fragments), wrap_lines=False),
                Window(FormattedTextControl(self._status_fragments), height=1, style='class:status'),
            ])),
            key_bindings=self.key_bindings,
            style=PAGER_STYLE,
            full_screen=True,
            input=input,
            output=output
        )
        self.host.set_height(self._text_rows())
        self.logger.debug(
            f"Pager opened {document.name or '<text>'}: {len(document.lines)} lines, {len(document.folds)} folds")

    def run(self) -> None:
        try:
            self.app.run()
        finally:
            self.controller.close()

    def _text_rows(self) -> int:
        return max(self.app.output.get_size().rows - 1, 1)

    def _invalidate(self) -> None:
        if self.app:
            self.app.invalidate()

    def _text_fragments(self):
        self.host.set_height(self._text_rows())
        view = self.host.get_view(self.host.viewport_id)
        width = len(str(len(self.document.lines)))
        fragments = []

        for line, fold in self.host.visible_rows():
            last = fold[1] if fold else line
            style = 'class:cursor-line' if line <= view.cursor_line <= last else ''
            fragments.append(('class:line-number', f"{line:>{width}} "))
            if fold:
                fragments.append((f"{style} class:fold", self.document.fold_label(*fold)))
            else:
                fragments.append((style, self.document.lines[line - 1]))
            fragments.append(('', '\n'))

        return fragments

    def _status_fragments(self):
        viewport_id = self.host.viewport_id
        view = self.host.get_view(viewport_id)
        scrolling = "  [scrolling]" if self.controller.live_tween(viewport_id) else ""
        return [('', (
            f" {self.document.name or '<text>'}  line {view.cursor_line}/{len(self.document.lines)}"
            f"  top {view.top_line}{scrolling} "
        ))]

    def _create_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        actions = self.actions
        host = self.host

        def count_digit(event):
            event.append_to_arg_count(event.data)

        for digit in '123456789':
            kb.add(digit)(count_digit)

        @kb.add('c-d')
        def _(event):
            actions.half_page_down(count=event.arg if event.arg_present else 0)

        @kb.add('c-u')
        def _(event):
            actions.half_page_up(count=event.arg if event.arg_present else 0)

        @kb.add('c-f')
        def _(event):
            actions.page_down(count=event.arg)

        @kb.add('c-b')
        def _(event):
            actions.page_up(count=event.arg)

        @kb.add('z', 't')
        def _(event):
            actions.cursor_top(delta_time_scale=True)

        @kb.add('z', 'b')
        def _(event):
            actions.cursor_bottom(delta_time_scale=True)

        @kb.add('z', 'z')
        def _(event):
            actions.cursor_center(delta_time_scale=True)

        @kb.add('j')
        @kb.add('down')
        def _(event):
            host.move_cursor(event.arg)

        @kb.add('k')
        @kb.add('up')
        def _(event):
            host.move_cursor(-event.arg)

        @kb.add('z', 'a')
        def _(event):
            host.toggle_fold(host.get_cursor(host.viewport_id)[0])

        @kb.add('z', 'o')
        def _(event):
            host.open_fold(host.get_cursor(host.viewport_id)[0])

        @kb.add('z', 'c')
        def _(event):
            host.close_fold(host.get_cursor(host.viewport_id)[0])

        @kb.add('q')
        @kb.add('c-c')
        def _(event):
            event.app.exit()

        return kb
