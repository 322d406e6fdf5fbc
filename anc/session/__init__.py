"""Interactive Session Package"""

from anc.session.controller import SessionController, SUCCESS_NOTE
from anc.session.runner import EffectRunner
from anc.session.state import Phase, Mode, Session, GenerationRequest, MODE_LABELS

__all__ = [
    "SessionController",
    "EffectRunner",
    "Phase",
    "Mode",
    "Session",
    "GenerationRequest",
    "MODE_LABELS",
    "SUCCESS_NOTE",
]
