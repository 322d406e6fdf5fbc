"""
Tests for the terminal shell: the pure view helpers, plus a few end-to-end
runs of CommitApp driven through Textual's test pilot with a scripted
effect runner.

Run with:
    pytest tests/test_tui.py -v
"""

import asyncio

import pytest

from anc.config import Config
from anc.git import ChangedFile, ChangeKind
from anc.session import SessionController, Phase, Mode, Session
from anc.session import events as ev
from anc.session.effects import LoadFiles, ProbeStaged, Stage, Generate, Commit, Cleanup, SaveConfig
from anc.tui import CommitApp
from anc.tui.view import MODES, list_length, render_body, render_file_list, render_hint, render_mode_list, render_title


def _file(path, staged=False, kind=ChangeKind.MODIFIED):
    return ChangedFile(path=path, kind=kind, is_staged=staged, is_tracked=kind is not ChangeKind.UNTRACKED)


# ---------------------------------------------------------------------------
# View helpers
# ---------------------------------------------------------------------------

class TestView:

    def test_loading_listing(self):
        session = Session()
        assert "Loading" in render_file_list(session, 0)
        assert list_length(session) == 0

    def test_no_changes(self):
        session = Session(files_loaded=True)
        assert render_title(session) == "No changes detected"
        assert "Make some changes" in render_body(session)

    def test_file_rows(self):
        session = Session(
            files=[_file("a.txt"), _file("b.txt", staged=True, kind=ChangeKind.ADDED)],
            selected={"b.txt"},
            files_loaded=True,
        )
        lines = render_file_list(session, cursor=1).split("\n")

        assert render_title(session) == "Select files to stage (2 files)"
        assert "\\[ ]" in lines[0] and "a.txt" in lines[0]
        assert lines[0].startswith(" ")
        assert "\\[x]" in lines[1] and "(staged)" in lines[1]
        assert ">" in lines[1].split("\\[")[0]
        assert list_length(session) == 2

    def test_paths_are_escaped(self):
        session = Session(files=[_file("docs/[draft].md")], files_loaded=True)
        assert "\\[draft]" in render_file_list(session, 0)

    def test_mode_list(self):
        lines = render_mode_list(cursor=2).split("\n")
        assert len(lines) == len(MODES) == 3
        assert Mode.CUSTOM.label in lines[2] and ">" in lines[2]
        assert lines[0] == f"  {Mode.ALL.label}"

    def test_pre_staged_body(self):
        session = Session(phase=Phase.RESOLVING_PRE_STAGED, already_staged={"b", "a"}, files_loaded=True)
        body = render_body(session)
        assert render_title(session) == "Already Staged Files Detected"
        assert body.index("- a") < body.index("- b")
        assert "Loading" not in body

    def test_entering_context_variants(self):
        session = Session(phase=Phase.ENTERING_CONTEXT)
        assert render_title(session) == "Enter additional context"
        assert render_hint(session).startswith("Enter")

        session.editing = True
        assert render_title(session) == "Edit commit message"
        assert "Ctrl+S" in render_hint(session)

    def test_review_shows_message(self):
        session = Session(phase=Phase.REVIEWING, generated_message="feat: [x] thing")
        assert render_body(session) == "feat: \\[x] thing"
        assert "e: edit" in render_hint(session)

    def test_failure_and_success(self):
        failed = Session(phase=Phase.FAILURE, error="boom")
        assert render_title(failed) == "Error"
        assert "boom" in render_body(failed)

        done = Session(phase=Phase.SUCCESS, success="Changes committed successfully!")
        assert "Changes committed successfully!" in render_body(done)
        assert render_hint(done) == "Press any key to exit"


# ---------------------------------------------------------------------------
# CommitApp under the test pilot
# ---------------------------------------------------------------------------

class ScriptedRunner:
    """Answers every effect immediately and records what it ran."""

    def __init__(self, files, staged=(), message="feat: scripted"):
        self.files = files
        self.staged = list(staged)
        self.message = message
        self.ran = []

    def run(self, effect):
        self.ran.append(effect)
        if isinstance(effect, LoadFiles):
            return ev.FilesLoaded(files=self.files)
        if isinstance(effect, ProbeStaged):
            return ev.StagedProbed(paths=self.staged)
        if isinstance(effect, SaveConfig):
            return ev.ConfigSaved()
        if isinstance(effect, Stage):
            return ev.StageCompleted()
        if isinstance(effect, Generate):
            return ev.GenerationCompleted(message=self.message)
        if isinstance(effect, Commit):
            return ev.CommitCompleted()
        return None


async def _settle(app, pilot):
    """Let effect workers finish and their completions be handled."""
    for _ in range(4):
        await app.workers.wait_for_complete()
        await pilot.pause()


def _run(scenario):
    asyncio.run(scenario())


class TestCommitApp:

    def test_full_flow_commits(self):
        runner = ScriptedRunner([_file("a.txt"), _file("b.txt")])
        controller = SessionController(Config(api_key="sk-test"))
        app = CommitApp(controller, runner)

        async def scenario():
            async with app.run_test() as pilot:
                await _settle(app, pilot)
                assert controller.session.phase is Phase.SELECTING_FILES

                await pilot.press("down", "space", "enter")
                await _settle(app, pilot)
                assert controller.session.phase is Phase.SELECTING_MODE

                await pilot.press("enter")
                await _settle(app, pilot)
                assert controller.session.phase is Phase.REVIEWING
                assert controller.session.generated_message == "feat: scripted"

                await pilot.press("enter")
                await _settle(app, pilot)
                assert controller.session.phase is Phase.SUCCESS

                await pilot.press("x")

        _run(scenario)

        assert Stage(("b.txt",)) in runner.ran
        assert Commit("feat: scripted") in runner.ran
        assert controller.session.phase is Phase.TERMINATED
        assert not any(isinstance(e, Cleanup) for e in runner.ran)

    def test_interrupt_cleans_up(self):
        runner = ScriptedRunner([_file("a.txt")])
        controller = SessionController(Config(api_key="sk-test"))
        app = CommitApp(controller, runner)

        async def scenario():
            async with app.run_test() as pilot:
                await _settle(app, pilot)
                await pilot.press("space", "enter")
                await _settle(app, pilot)
                await pilot.press("enter")
                await _settle(app, pilot)
                assert controller.session.phase is Phase.REVIEWING

                await pilot.press("ctrl+c")

        _run(scenario)

        assert Cleanup(("a.txt",)) in runner.ran
        assert controller.session.phase is Phase.TERMINATED

    def test_credential_prompt(self):
        runner = ScriptedRunner([_file("a.txt")])
        config = Config()
        controller = SessionController(config)
        app = CommitApp(controller, runner)

        async def scenario():
            async with app.run_test() as pilot:
                await pilot.pause()
                assert controller.session.phase is Phase.CONFIGURING_CREDENTIAL

                await pilot.press(*"typedkey", "enter")
                await _settle(app, pilot)
                assert controller.session.phase is Phase.SELECTING_FILES
                assert controller.session.files_loaded

                await pilot.press("q")

        _run(scenario)

        assert config.api_key == "typedkey"
        assert SaveConfig(config) in runner.ran

    @pytest.mark.parametrize("key", ["q", "escape", "ctrl+q"])
    def test_quit_keys_before_selection(self, key):
        runner = ScriptedRunner([_file("a.txt")])
        controller = SessionController(Config(api_key="sk-test"))
        app = CommitApp(controller, runner)

        async def scenario():
            async with app.run_test() as pilot:
                await _settle(app, pilot)
                await pilot.press(key)

        _run(scenario)

        assert controller.session.phase is Phase.TERMINATED
        assert not any(isinstance(e, Cleanup) for e in runner.ran)

    def test_crashing_effect_still_cleans_up(self):
        class CrashingRunner(ScriptedRunner):
            def run(self, effect):
                if isinstance(effect, Generate):
                    self.ran.append(effect)
                    raise RuntimeError("unexpected")
                return super().run(effect)

        runner = CrashingRunner([_file("a.txt")])
        controller = SessionController(Config(api_key="sk-test"))
        app = CommitApp(controller, runner)

        async def scenario():
            async with app.run_test() as pilot:
                await _settle(app, pilot)
                await pilot.press("space", "enter")
                await _settle(app, pilot)
                await pilot.press("enter")
                # A failed worker makes wait_for_complete raise, so poll instead
                for _ in range(100):
                    if controller.session.phase is Phase.FAILURE:
                        break
                    await pilot.pause(0.05)
                assert controller.session.phase is Phase.FAILURE
                assert "unexpected" in controller.session.error

                await pilot.press("x")

        _run(scenario)

        assert Cleanup(("a.txt",)) in runner.ran
        assert controller.session.phase is Phase.TERMINATED
