"""Rendering of session snapshots into Rich markup.

Pure functions of (session, cursor); the app only places the strings.
"""

from rich.markup import escape

from anc.git import ChangeKind
from anc.session import Phase, Mode, Session

MODES = list(Mode)

KIND_STYLES = {
    ChangeKind.ADDED: "green",
    ChangeKind.MODIFIED: "yellow",
    ChangeKind.DELETED: "red",
    ChangeKind.RENAMED: "cyan",
    ChangeKind.UNTRACKED: "magenta",
}

HINTS = {
    Phase.CONFIGURING_CREDENTIAL: "Enter: save, Esc: quit",
    Phase.SELECTING_FILES: "Space: toggle, a: all/none, Enter: continue, q: quit",
    Phase.RESOLVING_PRE_STAGED: "c: continue with staged files, u: unstage and start fresh, q: quit",
    Phase.SELECTING_MODE: "Enter: select, q: quit",
    Phase.GENERATING: "Please wait... (Ctrl+C to cancel)",
    Phase.REVIEWING: "Enter: commit, e: edit, r: regenerate, q: quit",
    Phase.COMMITTING: "Please wait...",
    Phase.SUCCESS: "Press any key to exit",
    Phase.FAILURE: "Press any key to exit",
}


def render_title(session: Session) -> str:
    phase = session.phase
    if phase is Phase.CONFIGURING_CREDENTIAL:
        return "Configure API Key"
    if phase is Phase.SELECTING_FILES:
        if session.files_loaded and not session.files:
            return "No changes detected"
        return f"Select files to stage ({len(session.files)} files)"
    if phase is Phase.RESOLVING_PRE_STAGED:
        return "Already Staged Files Detected"
    if phase is Phase.SELECTING_MODE:
        return "Select commit message mode"
    if phase is Phase.ENTERING_CONTEXT:
        return "Edit commit message" if session.editing else "Enter additional context"
    if phase is Phase.GENERATING:
        return "Generating Commit Message"
    if phase is Phase.REVIEWING:
        return "Review commit message"
    if phase is Phase.COMMITTING:
        return "Committing"
    if phase is Phase.FAILURE:
        return "Error"
    return ""


def render_file_list(session: Session, cursor: int) -> str:
    if not session.files_loaded:
        return "[dim]Loading changes...[/dim]"
    if not session.files:
        return "[dim]Make some changes and run again![/dim]"

    lines = []
    for i, changed in enumerate(session.files):
        pointer = "[bold magenta]>[/]" if i == cursor else " "
        box = "[bold green]\\[x][/]" if session.is_selected(changed.path) else "\\[ ]"
        style = KIND_STYLES.get(changed.kind, "white")
        kind = f"[{style}]{changed.kind.value:>2}[/]"
        staged = " [dim](staged)[/dim]" if changed.is_staged else ""
        lines.append(f"{pointer} {box} {kind} {escape(changed.path)}{staged}")
    return '\n'.join(lines)


def render_mode_list(cursor: int) -> str:
    lines = []
    for i, mode in enumerate(MODES):
        if i == cursor:
            lines.append(f"[bold magenta]> {mode.label}[/]")
        else:
            lines.append(f"  {mode.label}")
    return '\n'.join(lines)


def render_body(session: Session, cursor: int = 0) -> str:
    phase = session.phase
    if phase is Phase.SELECTING_FILES:
        return render_file_list(session, cursor)
    if phase is Phase.RESOLVING_PRE_STAGED:
        staged = '\n'.join(f"  - {escape(p)}" for p in sorted(session.already_staged))
        loading = "" if session.files_loaded else "\n\n[dim]Loading changes...[/dim]"
        return f"The following files are already staged:\n{staged}\n\nWhat would you like to do?{loading}"
    if phase is Phase.SELECTING_MODE:
        return render_mode_list(cursor)
    if phase is Phase.GENERATING:
        label = session.mode.label if session.mode else ""
        return f"[cyan]●[/] Generating commit message... [dim]{label}[/dim]"
    if phase is Phase.REVIEWING:
        return escape(session.generated_message) or "[dim](empty message)[/dim]"
    if phase is Phase.COMMITTING:
        return "[cyan]●[/] Committing changes..."
    if phase is Phase.SUCCESS:
        return f"[bold green]✓ {escape(session.success)}[/]"
    if phase is Phase.FAILURE:
        return f"[bold red]{escape(session.error)}[/]"
    return ""


def render_hint(session: Session) -> str:
    if session.phase is Phase.ENTERING_CONTEXT:
        if session.editing:
            return "Ctrl+S: commit, Esc: cancel"
        return "Enter: generate message, Esc: back"
    return HINTS.get(session.phase, "")


def list_length(session: Session) -> int:
    """Number of rows the cursor can move over in the current phase."""
    if session.phase is Phase.SELECTING_FILES:
        return len(session.files)
    if session.phase is Phase.SELECTING_MODE:
        return len(MODES)
    return 0
