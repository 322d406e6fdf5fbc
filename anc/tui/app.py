"""Textual shell around the session controller.

Keys and worker completions become controller events; effects become
thread workers. The app holds no session state of its own beyond the list
cursor.
"""

import logging
from functools import partial

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, Static, TextArea
from textual.worker import Worker, WorkerState

from anc.session import SessionController, EffectRunner, Phase
from anc.session import events as ev
from anc.session.effects import Effect, Cleanup, Quit
from anc.tui.styles import APP_CSS
from anc.tui.view import MODES, list_length, render_body, render_hint, render_title

logger = logging.getLogger(__name__)

EFFECT_GROUP = "effects"


class CommitApp(App):
    """Full-screen flow: select files, pick a mode, review, commit."""

    CSS = APP_CSS
    # Focus follows the phase; see _render_session
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Quit", priority=True, show=False),
        Binding("ctrl+q", "interrupt", "Quit", priority=True, show=False),
        Binding("ctrl+s", "save_edit", "Commit", priority=True, show=False),
        Binding("escape", "back", "Back", priority=True, show=False),
    ]

    def __init__(self, controller: SessionController, runner: EffectRunner) -> None:
        super().__init__()
        self.controller = controller
        self.runner = runner
        self._cursor = 0
        self._shown: tuple[Phase, bool] | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(id="title")
            yield Static(id="body")
            yield Input(id="text-input")
            yield TextArea(id="editor")
            yield Static(id="hint")

    def on_mount(self) -> None:
        self._schedule(self.controller.start())
        self._render_session()

    # Event loop plumbing

    def feed(self, event: ev.Event) -> None:
        """Run one event through the controller, then re-render."""
        effects = self.controller.handle(event)
        self._schedule(effects)
        if self.controller.session.phase is not Phase.TERMINATED:
            self._render_session()

    def _schedule(self, effects: list[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, Quit):
                self.exit(0)
            elif isinstance(effect, Cleanup):
                # Detached; returns as soon as the child is spawned
                self.runner.run(effect)
            else:
                self.run_worker(
                    partial(self.runner.run, effect),
                    name=type(effect).__name__,
                    group=EFFECT_GROUP,
                    thread=True,
                    exit_on_error=False,
                )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.worker.group != EFFECT_GROUP:
            return
        if event.state == WorkerState.SUCCESS and event.worker.result is not None:
            self.feed(event.worker.result)
        elif event.state == WorkerState.ERROR:
            logger.error("effect %s crashed: %s", event.worker.name, event.worker.error)
            self.feed(ev.EffectCrashed(str(event.worker.error)))

    # Rendering

    def _render_session(self) -> None:
        s = self.controller.session
        shown = (s.phase, s.editing)
        entering = shown != self._shown
        if entering:
            self._cursor = 0
        self._cursor = max(0, min(self._cursor, list_length(s) - 1))

        self.query_one("#title", Static).update(render_title(s))
        self.query_one("#body", Static).update(render_body(s, self._cursor))
        self.query_one("#hint", Static).update(render_hint(s))

        text_input = self.query_one("#text-input", Input)
        editor = self.query_one("#editor", TextArea)
        wants_input = s.phase is Phase.CONFIGURING_CREDENTIAL or (
            s.phase is Phase.ENTERING_CONTEXT and not s.editing
        )
        wants_editor = s.phase is Phase.ENTERING_CONTEXT and s.editing
        text_input.display = wants_input
        editor.display = wants_editor

        if entering:
            if wants_input:
                credential = s.phase is Phase.CONFIGURING_CREDENTIAL
                text_input.password = credential
                text_input.placeholder = (
                    "Enter your API key..." if credential
                    else "Enter additional context for commit message generation..."
                )
                text_input.value = "" if credential else s.custom_context
                text_input.focus()
            elif wants_editor:
                editor.load_text(s.generated_message)
                editor.focus()
            else:
                self.set_focus(None)
        self._shown = shown

    # Input

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.controller.session.phase is Phase.CONFIGURING_CREDENTIAL:
            self.feed(ev.CredentialSubmitted(event.value))
        elif self.controller.session.phase is Phase.ENTERING_CONTEXT:
            self.feed(ev.ContextSubmitted(event.value))

    def on_key(self, event: events.Key) -> None:
        s = self.controller.session
        if s.phase in (Phase.CONFIGURING_CREDENTIAL, Phase.ENTERING_CONTEXT, Phase.TERMINATED):
            return
        if s.phase in (Phase.SUCCESS, Phase.FAILURE):
            self.feed(ev.Acknowledge())
            return

        key = event.key
        if key == "q":
            self.feed(ev.Interrupt())
        elif key in ("up", "k"):
            self._move(-1)
        elif key in ("down", "j"):
            self._move(1)
        elif s.phase is Phase.SELECTING_FILES:
            self._selecting_files_key(key)
        elif s.phase is Phase.RESOLVING_PRE_STAGED:
            if key == "c":
                self.feed(ev.ContinueWithStaged())
            elif key == "u":
                self.feed(ev.StartFresh())
        elif s.phase is Phase.SELECTING_MODE:
            if key == "enter":
                self.feed(ev.ModeChosen(MODES[self._cursor]))
        elif s.phase is Phase.REVIEWING:
            if key == "enter":
                self.feed(ev.CommitRequested())
            elif key == "e":
                self.feed(ev.EditRequested())
            elif key == "r":
                self.feed(ev.RegenerateRequested())

    def _selecting_files_key(self, key: str) -> None:
        s = self.controller.session
        if key == "space" and s.files:
            self.feed(ev.ToggleFile(s.files[self._cursor].path))
        elif key == "a":
            self.feed(ev.ToggleAll())
        elif key == "enter" and s.files_loaded:
            self.feed(ev.ConfirmSelection())

    def _move(self, delta: int) -> None:
        size = list_length(self.controller.session)
        if size:
            self._cursor = (self._cursor + delta) % size
            self._render_session()

    # Bindings

    def action_interrupt(self) -> None:
        self.feed(ev.Interrupt())

    def action_back(self) -> None:
        phase = self.controller.session.phase
        if phase in (Phase.SUCCESS, Phase.FAILURE):
            self.feed(ev.Acknowledge())
        elif phase is Phase.ENTERING_CONTEXT:
            self.feed(ev.Back())
        else:
            self.feed(ev.Interrupt())

    def action_save_edit(self) -> None:
        s = self.controller.session
        if s.phase is Phase.ENTERING_CONTEXT and s.editing:
            self.feed(ev.EditSaved(self.query_one("#editor", TextArea).text))
        elif s.phase in (Phase.SUCCESS, Phase.FAILURE):
            self.feed(ev.Acknowledge())
