"""Effect descriptions returned by the controller.

An effect says what should happen, never how. The EffectRunner turns each
one into a single completion event (except Cleanup and Quit, which have no
completion).
"""

from dataclasses import dataclass

from anc.config import Config
from anc.session.state import GenerationRequest


class Effect:
    pass


@dataclass(frozen=True)
class LoadFiles(Effect):
    pass


@dataclass(frozen=True)
class ProbeStaged(Effect):
    pass


@dataclass(frozen=True)
class SaveConfig(Effect):
    config: Config


@dataclass(frozen=True)
class Stage(Effect):
    paths: tuple[str, ...]


@dataclass(frozen=True)
class Unstage(Effect):
    paths: tuple[str, ...]


@dataclass(frozen=True)
class Generate(Effect):
    request: GenerationRequest


@dataclass(frozen=True)
class Commit(Effect):
    message: str


@dataclass(frozen=True)
class Cleanup(Effect):
    """Fire-and-forget unstage on the way out."""
    paths: tuple[str, ...]


@dataclass(frozen=True)
class Quit(Effect):
    pass
