"""Effect Runner - executes controller effects against git and the LLM.

Every ``run()`` call is blocking and meant to be called off the event loop
(the TUI uses thread workers). It returns the single completion event for
the effect, or None for effects without one.
"""

import logging
from typing import Callable

from anc.config import Config, ConfigManager
from anc.git import GitRepo, GitError
from anc.llm import LLMClient, LLMError, build_user_message, get_client
from anc.session import events as ev
from anc.session.effects import (
    Effect, LoadFiles, ProbeStaged, SaveConfig, Stage, Unstage, Generate, Commit, Cleanup, Quit,
)
from anc.session.state import Mode, GenerationRequest

logger = logging.getLogger(__name__)


class EffectRunner:
    """Runs effects; domain errors come back as events, never as exceptions."""

    def __init__(
        self,
        repo: GitRepo,
        config: Config,
        config_manager: ConfigManager | None = None,
        client_factory: Callable[[Config], LLMClient] = get_client,
    ):
        self.repo = repo
        self.config = config
        self.config_manager = config_manager or ConfigManager()
        self.client_factory = client_factory

    def run(self, effect: Effect) -> ev.Event | None:
        logger.debug("running %r", effect)

        if isinstance(effect, LoadFiles):
            try:
                return ev.FilesLoaded(files=self.repo.list_changes())
            except GitError as e:
                return ev.FilesLoaded(error=str(e))

        if isinstance(effect, ProbeStaged):
            try:
                return ev.StagedProbed(paths=self.repo.list_staged())
            except GitError as e:
                return ev.StagedProbed(error=str(e))

        if isinstance(effect, SaveConfig):
            try:
                self.config_manager.save(effect.config)
                return ev.ConfigSaved()
            except OSError as e:
                return ev.ConfigSaved(error=str(e))

        if isinstance(effect, Stage):
            try:
                self.repo.stage(list(effect.paths))
                return ev.StageCompleted()
            except GitError as e:
                return ev.StageCompleted(error=str(e))

        if isinstance(effect, Unstage):
            try:
                self.repo.unstage(list(effect.paths))
                return ev.UnstageCompleted()
            except GitError as e:
                return ev.UnstageCompleted(error=str(e))

        if isinstance(effect, Generate):
            try:
                return ev.GenerationCompleted(message=self.generate(effect.request))
            except (GitError, LLMError) as e:
                return ev.GenerationCompleted(error=str(e))

        if isinstance(effect, Commit):
            try:
                self.repo.commit(effect.message)
                return ev.CommitCompleted()
            except GitError as e:
                return ev.CommitCompleted(error=str(e))

        if isinstance(effect, Cleanup):
            self.repo.unstage_detached(list(effect.paths))
            return None

        if isinstance(effect, Quit):
            return None

        raise TypeError(f"Unknown effect: {effect!r}")

    def generate(self, request: GenerationRequest) -> str:
        """Produce a commit message for the request's mode."""
        client = self.client_factory(self.config)

        if request.mode is Mode.BY_FILE:
            return self._generate_by_file(client, request)

        diff = self.repo.diff()
        return client.complete(request.system_prompt, build_user_message(diff, request.context))

    def _generate_by_file(self, client: LLMClient, request: GenerationRequest) -> str:
        lines = []
        for path in self.repo.list_staged():
            try:
                diff = self.repo.diff_for(path)
                message = client.complete(request.system_prompt, diff)
            except (GitError, LLMError) as e:
                # A failing file contributes nothing
                logger.debug("skipping %s: %s", path, e)
                continue
            lines.append(f"{path}: {message}")
        return '\n'.join(lines)
