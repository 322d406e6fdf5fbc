"""Terminal UI Package"""

from anc.tui.app import CommitApp

__all__ = ["CommitApp"]
