"""Session state owned by the controller."""

from dataclasses import dataclass, field
from enum import Enum

from anc.git import ChangedFile


class Phase(Enum):
    CONFIGURING_CREDENTIAL = "configuring_credential"
    SELECTING_FILES = "selecting_files"
    RESOLVING_PRE_STAGED = "resolving_pre_staged"
    SELECTING_MODE = "selecting_mode"
    ENTERING_CONTEXT = "entering_context"
    GENERATING = "generating"
    REVIEWING = "reviewing"
    COMMITTING = "committing"
    SUCCESS = "success"
    FAILURE = "failure"
    TERMINATED = "terminated"


class Mode(Enum):
    """How the commit message is generated."""
    ALL = "all"
    BY_FILE = "by-file"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return MODE_LABELS[self]


MODE_LABELS = {
    Mode.ALL: "All-in-one summary",
    Mode.BY_FILE: "File-by-file summary",
    Mode.CUSTOM: "Custom prompt",
}


@dataclass(frozen=True)
class GenerationRequest:
    """Inputs of one generation attempt."""
    mode: Mode
    system_prompt: str
    context: str = ""


@dataclass
class Session:
    """Live state of one run. Only the controller mutates it."""
    phase: Phase = Phase.SELECTING_FILES
    files: list[ChangedFile] = field(default_factory=list)
    selected: set[str] = field(default_factory=set)
    already_staged: set[str] = field(default_factory=set)
    mode: Mode | None = None
    generated_message: str = ""
    custom_context: str = ""
    error: str = ""
    success: str = ""

    # Editing variant of ENTERING_CONTEXT
    editing: bool = False
    files_loaded: bool = False
    staged_probed: bool = False
    stage_pending: bool = False
    generation_deferred: bool = False

    @property
    def candidate_paths(self) -> list[str]:
        return [f.path for f in self.files]

    @property
    def all_selected(self) -> bool:
        return bool(self.files) and self.selected >= set(self.candidate_paths)

    def is_selected(self, path: str) -> bool:
        return path in self.selected
