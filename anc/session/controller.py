"""Session Controller - the state machine behind the interactive flow.

``handle()`` takes one event, mutates the Session and returns the effects
to schedule. It never performs I/O itself, so every transition can be
exercised without a terminal, a repository or the network.
"""

import logging

from anc.config import Config
from anc.session import events as ev
from anc.session.effects import (
    Effect, LoadFiles, ProbeStaged, SaveConfig, Stage, Unstage, Generate, Commit, Cleanup, Quit,
)
from anc.session.state import Phase, Mode, Session, GenerationRequest

logger = logging.getLogger(__name__)

SUCCESS_NOTE = "Changes committed successfully!"


class SessionController:
    """Owns the Session and drives it from events."""

    def __init__(self, config: Config, session: Session | None = None):
        self.config = config
        self.session = session or Session()

    def start(self) -> list[Effect]:
        """Pick the initial phase and return the startup effects."""
        if not self.config.api_key:
            self.session.phase = Phase.CONFIGURING_CREDENTIAL
            return []
        self.session.phase = Phase.SELECTING_FILES
        # Listing and staged probe race each other; both orders are handled
        return [LoadFiles(), ProbeStaged()]

    def handle(self, event: ev.Event) -> list[Effect]:
        s = self.session
        if s.phase is Phase.TERMINATED:
            return []
        if isinstance(event, ev.Interrupt):
            return self._terminate()
        if s.phase in (Phase.SUCCESS, Phase.FAILURE) and not isinstance(event, ev.Acknowledge):
            return []

        handler = self._HANDLERS.get(type(event))
        if handler is None:
            logger.debug("unhandled event %r", event)
            return []

        before = s.phase
        effects = handler(self, event)
        if s.phase is not before:
            logger.debug("%s: %s -> %s", type(event).__name__, before.value, s.phase.value)
        return effects

    # Credential

    def _on_credential(self, event: ev.CredentialSubmitted) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.CONFIGURING_CREDENTIAL:
            return []
        value = event.value.strip()
        if not value:
            return self._fail("API key cannot be empty")
        self.config.api_key = value
        s.phase = Phase.SELECTING_FILES
        return [SaveConfig(self.config), LoadFiles(), ProbeStaged()]

    def _on_config_saved(self, event: ev.ConfigSaved) -> list[Effect]:
        if event.error:
            return self._fail(f"Failed to save config: {event.error}")
        return []

    # Startup probes

    def _on_files_loaded(self, event: ev.FilesLoaded) -> list[Effect]:
        s = self.session
        if event.error:
            return self._fail(event.error)
        s.files = list(event.files)
        s.files_loaded = True
        paths = set(s.candidate_paths)
        s.selected &= paths
        if self.config.auto_stage_all and s.phase is Phase.SELECTING_FILES:
            s.selected = paths
        return []

    def _on_staged_probed(self, event: ev.StagedProbed) -> list[Effect]:
        s = self.session
        first_probe = not s.staged_probed
        s.staged_probed = True
        if event.error:
            # Not being able to tell is the same as nothing staged
            logger.debug("staged probe failed: %s", event.error)
            return []
        if not event.paths or not first_probe:
            return []
        if s.phase is not Phase.SELECTING_FILES or s.stage_pending:
            return []
        s.already_staged = set(event.paths)
        s.selected = set()
        s.phase = Phase.RESOLVING_PRE_STAGED
        return []

    # Pre-staged files

    def _on_continue(self, event: ev.ContinueWithStaged) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.RESOLVING_PRE_STAGED or not s.files_loaded:
            return []
        s.selected = s.already_staged & set(s.candidate_paths)
        if not s.selected:
            return self._fail("No files selected")
        return self._after_selection()

    def _on_start_fresh(self, event: ev.StartFresh) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.RESOLVING_PRE_STAGED:
            return []
        paths = tuple(sorted(s.already_staged))
        s.already_staged = set()
        s.selected = set()
        s.files = []
        s.files_loaded = False
        s.phase = Phase.SELECTING_FILES
        # The listing is reloaded once the unstage has landed
        return [Unstage(paths)]

    def _on_unstage_completed(self, event: ev.UnstageCompleted) -> list[Effect]:
        if event.error:
            return self._fail(event.error)
        return [LoadFiles()]

    # File selection

    def _on_toggle_file(self, event: ev.ToggleFile) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.SELECTING_FILES or event.path not in s.candidate_paths:
            return []
        if event.path in s.selected:
            s.selected.discard(event.path)
        else:
            s.selected.add(event.path)
        return []

    def _on_toggle_all(self, event: ev.ToggleAll) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.SELECTING_FILES:
            return []
        if s.all_selected:
            s.selected = set()
        else:
            s.selected = set(s.candidate_paths)
        return []

    def _on_confirm(self, event: ev.ConfirmSelection) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.SELECTING_FILES:
            return []
        if not s.selected:
            return self._fail("No files selected")
        paths = tuple(p for p in s.candidate_paths if p in s.selected)
        s.stage_pending = True
        return [Stage(paths)] + self._after_selection()

    def _on_stage_completed(self, event: ev.StageCompleted) -> list[Effect]:
        s = self.session
        s.stage_pending = False
        if event.error:
            s.generation_deferred = False
            return self._fail(event.error)
        if s.generation_deferred:
            s.generation_deferred = False
            return [Generate(self._request())]
        return []

    def _after_selection(self) -> list[Effect]:
        """Move on from a confirmed selection, honoring default_mode."""
        default_mode = self.config.default_mode
        if default_mode in (Mode.ALL.value, Mode.BY_FILE.value):
            self.session.mode = Mode(default_mode)
            return self._generate()
        self.session.phase = Phase.SELECTING_MODE
        return []

    # Mode and context

    def _on_mode_chosen(self, event: ev.ModeChosen) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.SELECTING_MODE:
            return []
        s.mode = event.mode
        if event.mode is Mode.CUSTOM:
            s.editing = False
            s.phase = Phase.ENTERING_CONTEXT
            return []
        return self._generate()

    def _on_context_submitted(self, event: ev.ContextSubmitted) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.ENTERING_CONTEXT or s.editing:
            return []
        s.custom_context = event.text.strip()
        return self._generate()

    def _on_back(self, event: ev.Back) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.ENTERING_CONTEXT:
            return []
        if s.editing:
            # Edits are discarded; generated_message was never touched
            s.editing = False
            s.phase = Phase.REVIEWING
        else:
            s.phase = Phase.SELECTING_MODE
        return []

    # Generation

    def _request(self) -> GenerationRequest:
        s = self.session
        if s.mode is Mode.BY_FILE:
            return GenerationRequest(mode=s.mode, system_prompt=self.config.system_prompt_file)
        return GenerationRequest(
            mode=s.mode,
            system_prompt=self.config.system_prompt_all,
            context=s.custom_context if s.mode is Mode.CUSTOM else "",
        )

    def _generate(self) -> list[Effect]:
        s = self.session
        s.phase = Phase.GENERATING
        if s.stage_pending:
            s.generation_deferred = True
            return []
        return [Generate(self._request())]

    def _on_generation_completed(self, event: ev.GenerationCompleted) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.GENERATING:
            return []
        if event.error:
            return self._fail(event.error)
        s.generated_message = event.message
        s.phase = Phase.REVIEWING
        return []

    # Review, edit, commit

    def _on_commit_requested(self, event: ev.CommitRequested) -> list[Effect]:
        if self.session.phase is not Phase.REVIEWING:
            return []
        return self._commit(self.session.generated_message)

    def _on_edit_requested(self, event: ev.EditRequested) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.REVIEWING:
            return []
        s.editing = True
        s.phase = Phase.ENTERING_CONTEXT
        return []

    def _on_edit_saved(self, event: ev.EditSaved) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.ENTERING_CONTEXT or not s.editing:
            return []
        if event.text.strip():
            s.generated_message = event.text
        s.editing = False
        return self._commit(s.generated_message)

    def _on_regenerate(self, event: ev.RegenerateRequested) -> list[Effect]:
        if self.session.phase is not Phase.REVIEWING:
            return []
        return self._generate()

    def _commit(self, message: str) -> list[Effect]:
        self.session.phase = Phase.COMMITTING
        return [Commit(message)]

    def _on_commit_completed(self, event: ev.CommitCompleted) -> list[Effect]:
        s = self.session
        if s.phase is not Phase.COMMITTING:
            return []
        if event.error:
            return self._fail(event.error)
        s.success = SUCCESS_NOTE
        s.phase = Phase.SUCCESS
        return []

    # Endings

    def _on_effect_crashed(self, event: ev.EffectCrashed) -> list[Effect]:
        self.session.stage_pending = False
        self.session.generation_deferred = False
        return self._fail(f"Unexpected error: {event.error}")

    def _on_acknowledge(self, event: ev.Acknowledge) -> list[Effect]:
        if self.session.phase in (Phase.SUCCESS, Phase.FAILURE):
            return self._terminate()
        return []

    def _fail(self, message: str) -> list[Effect]:
        logger.debug("failure: %s", message)
        self.session.error = message
        self.session.phase = Phase.FAILURE
        return []

    def _terminate(self) -> list[Effect]:
        """End the session, unstaging what this run staged unless it committed."""
        s = self.session
        effects: list[Effect] = []
        if s.phase is not Phase.SUCCESS and s.selected:
            paths = tuple(sorted(s.selected - s.already_staged))
            if paths:
                effects.append(Cleanup(paths))
        logger.debug("terminating from %s", s.phase.value)
        s.phase = Phase.TERMINATED
        effects.append(Quit())
        return effects

    _HANDLERS = {
        ev.CredentialSubmitted: _on_credential,
        ev.ConfigSaved: _on_config_saved,
        ev.FilesLoaded: _on_files_loaded,
        ev.StagedProbed: _on_staged_probed,
        ev.ContinueWithStaged: _on_continue,
        ev.StartFresh: _on_start_fresh,
        ev.UnstageCompleted: _on_unstage_completed,
        ev.ToggleFile: _on_toggle_file,
        ev.ToggleAll: _on_toggle_all,
        ev.ConfirmSelection: _on_confirm,
        ev.StageCompleted: _on_stage_completed,
        ev.ModeChosen: _on_mode_chosen,
        ev.ContextSubmitted: _on_context_submitted,
        ev.Back: _on_back,
        ev.GenerationCompleted: _on_generation_completed,
        ev.CommitRequested: _on_commit_requested,
        ev.EditRequested: _on_edit_requested,
        ev.EditSaved: _on_edit_saved,
        ev.RegenerateRequested: _on_regenerate,
        ev.CommitCompleted: _on_commit_completed,
        ev.EffectCrashed: _on_effect_crashed,
        ev.Acknowledge: _on_acknowledge,
    }
