"""CSS for the commit app."""

APP_CSS = """
Screen {
    align: center middle;
}

#dialog {
    width: 80vw;
    min-width: 50;
    max-width: 100;
    height: auto;
    max-height: 90%;
    padding: 1 2;
    border: round $primary;
    background: $surface;
}

#title {
    text-style: bold;
    color: $accent;
    margin-bottom: 1;
}

#body {
    height: auto;
    max-height: 30;
    overflow-y: auto;
}

#text-input {
    margin-top: 1;
}

#editor {
    height: 12;
    margin-top: 1;
}

#hint {
    margin-top: 1;
    color: $text-muted;
}
"""
