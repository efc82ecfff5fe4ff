"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - single column
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Persona Bar
   ============================================ */
#persona-bar {
    height: auto;
    padding: 0 1;
    background: $panel;
    border-bottom: solid $border;
}

#persona-label {
    width: auto;
    padding: 1 1 0 0;
    color: $text-muted;
}

#persona-select {
    width: 40;
}

/* ============================================
   Transcript Panel
   ============================================ */
#transcript {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 2;
    background: transparent;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.thinking {
    color: $text-muted;
    text-style: italic;
}

.message-header,
.message-content {
    height: auto;
}

.edit-btn {
    height: 1;
    min-width: 6;
    border: none;
    background: transparent;
    color: $text-muted;

    &:hover {
        color: $success;
    }
}

.edit-input {
    height: 6;
    margin: 1 0 0 0;
}

.edit-buttons {
    height: 3;

    Button {
        margin: 0 1 0 0;
    }
}

/* ============================================
   Log Panel
   ============================================ */
#log-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

/* ============================================
   Bottom Bar - Input + Disclaimer
   ============================================ */
#bottom-bar {
    height: auto;
    padding: 0 1;
    background: $panel;
    border-top: solid $border;
}

ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    text-style: bold;
}

#disclaimer {
    width: 100%;
    content-align: center middle;
    color: $text-muted;
}
"""
