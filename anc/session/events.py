"""Events fed into the session controller.

User intents come from the terminal shell; completions come back from
effects run by the EffectRunner. Both are plain values and are handled
strictly in arrival order.
"""

from dataclasses import dataclass, field

from anc.git import ChangedFile
from anc.session.state import Mode


class Event:
    """Base class for everything the controller reacts to."""


# User intents

@dataclass(frozen=True)
class CredentialSubmitted(Event):
    value: str


@dataclass(frozen=True)
class ContinueWithStaged(Event):
    pass


@dataclass(frozen=True)
class StartFresh(Event):
    pass


@dataclass(frozen=True)
class ToggleFile(Event):
    path: str


@dataclass(frozen=True)
class ToggleAll(Event):
    pass


@dataclass(frozen=True)
class ConfirmSelection(Event):
    pass


@dataclass(frozen=True)
class ModeChosen(Event):
    mode: Mode


@dataclass(frozen=True)
class ContextSubmitted(Event):
    text: str


@dataclass(frozen=True)
class EditRequested(Event):
    pass


@dataclass(frozen=True)
class EditSaved(Event):
    text: str


@dataclass(frozen=True)
class RegenerateRequested(Event):
    pass


@dataclass(frozen=True)
class CommitRequested(Event):
    pass


@dataclass(frozen=True)
class Back(Event):
    """Leave a text entry without submitting."""


@dataclass(frozen=True)
class Acknowledge(Event):
    """Any key on the success or failure screen."""


@dataclass(frozen=True)
class Interrupt(Event):
    """Global cancel."""


# Completions

@dataclass(frozen=True)
class FilesLoaded(Event):
    files: list[ChangedFile] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class StagedProbed(Event):
    paths: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class ConfigSaved(Event):
    error: str | None = None


@dataclass(frozen=True)
class StageCompleted(Event):
    error: str | None = None


@dataclass(frozen=True)
class UnstageCompleted(Event):
    error: str | None = None


@dataclass(frozen=True)
class GenerationCompleted(Event):
    message: str = ""
    error: str | None = None


@dataclass(frozen=True)
class CommitCompleted(Event):
    error: str | None = None


@dataclass(frozen=True)
class EffectCrashed(Event):
    """An effect raised something the runner does not translate."""
    error: str
