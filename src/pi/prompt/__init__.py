"""pi-prompt: interactive line-mode terminal prompts."""

# Answers and errors
from pi.prompt.answer import Answer, AnswerStatus
from pi.prompt.errors import (
    InvalidConfigurationError,
    NotTTYError,
    OperationCanceledError,
    OperationInterruptedError,
    PromptError,
    PromptIOError,
)

# Autocompletion
from pi.prompt.autocompletion import Autocomplete, SuggestionList

# Event loop
from pi.prompt.driver import run_prompt

# History
from pi.prompt.history import History, SimpleHistory

# Formatters and parsers
from pi.prompt.formatter import (
    format_bool,
    format_bool_default,
    format_date,
    format_editor_answer,
    format_option,
    format_options,
    format_password,
    format_string,
)
from pi.prompt.parser import parse_bool, parse_float, parse_int

# Frames and rendering
from pi.prompt.frame import CURSOR_MARKER, Frame, FrameBuilder
from pi.prompt.renderer import Renderer

# Fuzzy matching
from pi.prompt.fuzzy import Scorer, contains_scorer, fuzzy_score, fuzzy_scorer

# Keybindings
from pi.prompt.keybindings import (
    DEFAULT_PROMPT_KEYBINDINGS,
    PromptAction,
    PromptKeybindingsManager,
    get_prompt_keybindings,
    set_prompt_keybindings,
)

# Keyboard input handling
from pi.prompt.keys import KeyEvent, KeyId, parse_key, parse_key_event

# List engine
from pi.prompt.list_engine import ListEngine, ListOption, Page, ScoredOption

# Prompts
from pi.prompt.prompts import (
    Confirm,
    CustomType,
    DateSelect,
    Editor,
    ExternalEditor,
    MultiSelect,
    Password,
    PasswordDisplayMode,
    Prompt,
    PromptConfig,
    Select,
    Text,
)

# Render configuration
from pi.prompt.render_config import (
    CalendarRenderConfig,
    RenderConfig,
    get_render_config,
    set_render_config,
)

# Input buffering
from pi.prompt.stdin_buffer import StdinBuffer

# Terminal interface and implementations
from pi.prompt.terminal import ProcessTerminal, Terminal

# Text editing
from pi.prompt.text_editor import TextEditor

# Utilities
from pi.prompt.utils import visible_width

# Validation
from pi.prompt.validator import (
    ExactLengthValidator,
    MaxLengthValidator,
    MinLengthValidator,
    Validation,
    Validator,
    ValueRequiredValidator,
)

__all__ = [
    # Answers
    "Answer",
    "AnswerStatus",
    # Errors
    "InvalidConfigurationError",
    "NotTTYError",
    "OperationCanceledError",
    "OperationInterruptedError",
    "PromptError",
    "PromptIOError",
    # Autocompletion
    "Autocomplete",
    "SuggestionList",
    # Event loop
    "run_prompt",
    # History
    "History",
    "SimpleHistory",
    # Formatters and parsers
    "format_bool",
    "format_bool_default",
    "format_date",
    "format_editor_answer",
    "format_option",
    "format_options",
    "format_password",
    "format_string",
    "parse_bool",
    "parse_float",
    "parse_int",
    # Rendering
    "CURSOR_MARKER",
    "Frame",
    "FrameBuilder",
    "Renderer",
    # Fuzzy
    "Scorer",
    "contains_scorer",
    "fuzzy_score",
    "fuzzy_scorer",
    # Keybindings
    "DEFAULT_PROMPT_KEYBINDINGS",
    "PromptAction",
    "PromptKeybindingsManager",
    "get_prompt_keybindings",
    "set_prompt_keybindings",
    # Keys
    "KeyEvent",
    "KeyId",
    "parse_key",
    "parse_key_event",
    # List engine
    "ListEngine",
    "ListOption",
    "Page",
    "ScoredOption",
    # Prompts
    "Confirm",
    "CustomType",
    "DateSelect",
    "Editor",
    "ExternalEditor",
    "MultiSelect",
    "Password",
    "PasswordDisplayMode",
    "Prompt",
    "PromptConfig",
    "Select",
    "Text",
    # Render config
    "CalendarRenderConfig",
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    # Stdin buffer
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Text editing
    "TextEditor",
    # Utilities
    "visible_width",
    # Validation
    "ExactLengthValidator",
    "MaxLengthValidator",
    "MinLengthValidator",
    "Validation",
    "Validator",
    "ValueRequiredValidator",
]
