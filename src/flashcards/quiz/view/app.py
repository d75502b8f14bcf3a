"""Textual front end: a set-selection screen and a keypad quiz screen."""

from __future__ import annotations

import logging
from typing import Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Static

from ...config import MessagesConfig, default_config
from ..engine import QuizEngine
from ..keypad import LAYOUT, label_for
from ..problems import DataLoadError, ProblemSet
from ..session import SubmitResult, position_label, problem_text

logger = logging.getLogger("flashcards.view")


class SetSelectionScreen(Screen):
    def compose(self) -> ComposeResult:
        yield Static("Pick a problem set", id="heading")
        yield Vertical(id="set-list")
        yield Static("", id="load-error")
        yield Footer()

    def show_sets(self, sets: Sequence[ProblemSet]) -> None:
        container = self.query_one("#set-list", Vertical)
        container.remove_children()
        container.mount(
            *[
                Button(problem_set.title, id=f"set-{idx}")
                for idx, problem_set in enumerate(sets)
            ]
        )

    def show_error(self, message: str) -> None:
        self.query_one("#load-error", Static).update(Text(message))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id or ""
        if bid.startswith("set-"):
            app: FlashcardsApp = self.app  # type: ignore[assignment]
            app.start_set(int(bid[len("set-"):]))


class QuizScreen(Screen):
    AUTO_FOCUS = None
    BINDINGS = [
        *[Binding(d, f"press('{d}')", d, show=False) for d in "0123456789"],
        Binding("backspace", "press('clear')", "Clear"),
        Binding("enter", "press('submit')", "OK", priority=True),
        Binding("escape", "app.back", "Back"),
    ]

    def __init__(self, engine: QuizEngine) -> None:
        super().__init__()
        self.engine = engine

    def compose(self) -> ComposeResult:
        with Vertical(id="card"):
            yield Static("", id="question-number")
            yield Static("", id="problem-text")
            yield Static("", id="answer-input")
            yield Static("", id="message-area")
        with Grid(id="keypad"):
            for row in LAYOUT:
                for value in row:
                    yield Button(label_for(value), id=f"key-{value}")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self, message: str = "") -> None:
        question = self.engine.current_question
        if question is None:
            return
        self.query_one("#question-number", Static).update(
            position_label(self.engine.session)
        )
        self.query_one("#problem-text", Static).update(
            Text(problem_text(question))
        )
        self.query_one("#answer-input", Static).update(
            self.engine.pending_input
        )
        self.query_one("#message-area", Static).update(Text(message))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id or ""
        if bid.startswith("key-"):
            self.action_press(bid[len("key-"):])

    def action_press(self, value: str) -> None:
        app: FlashcardsApp = self.app  # type: ignore[assignment]
        app.press_key(value)


class FlashcardsApp(App):
    TITLE = "Flashcards"
    CSS = """
#heading, #question-number { text-style: bold; margin: 1 2; }
#set-list Button { width: 40; margin: 0 2; }
#load-error, #message-area { color: $error; margin: 1 2; }
#problem-text { text-style: bold; margin: 0 2; }
#answer-input { margin: 1 2; min-height: 1; }
#keypad { grid-size: 3 4; grid-gutter: 1; width: 40; height: auto; }
#keypad { margin: 0 2; }
#keypad Button { width: 100%; }
"""

    def __init__(
        self,
        engine: QuizEngine,
        *,
        messages: MessagesConfig | None = None,
    ) -> None:
        super().__init__()
        self.engine = engine
        self.messages = messages or default_config().messages
        self.load_error: str | None = None
        self.last_notice: str | None = None
        self._selection = SetSelectionScreen()
        self._quiz_screen: QuizScreen | None = None

    async def on_mount(self) -> None:
        await self.push_screen(self._selection)
        await self.load_sets()

    async def load_sets(self) -> None:
        if self.engine.loaded:
            sets = self.engine.list_sets()
        else:
            try:
                sets = await self.engine.load_problem_sets()
            except DataLoadError:
                logger.exception("Failed to load problem sets")
                self.load_error = self.messages.load_error
                self._selection.show_error(self.load_error)
                return
        self._selection.show_sets(sets)

    def start_set(self, key: ProblemSet | str | int) -> None:
        session = self.engine.start(key)
        if session.is_complete:
            self.last_notice = "This set has no questions."
            self.notify(self.last_notice, severity="warning")
            return
        self._quiz_screen = QuizScreen(self.engine)
        self.push_screen(self._quiz_screen)

    def press_key(self, value: str) -> SubmitResult | None:
        """Route one keypad value to the engine and redraw the quiz."""

        result = self.engine.press(value)
        if result is not None and result.complete:
            self._finish()
            return result
        screen = self._quiz_screen
        if screen is not None and screen.is_mounted:
            screen.refresh_view(self.message_text())
        return result

    def message_text(self) -> str:
        if self.engine.last_submit_was_correct is False:
            return self.messages.incorrect
        return ""

    def action_back(self) -> None:
        if self._quiz_screen is not None:
            self._quiz_screen = None
            self.pop_screen()

    def _finish(self) -> None:
        self.last_notice = self.messages.complete
        if self._quiz_screen is None:
            return
        self._quiz_screen = None
        self.pop_screen()
        self.notify(self.last_notice, title=self.engine.session.title or "")
