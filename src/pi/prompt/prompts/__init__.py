"""Prompt kinds: configuration values and their state machines."""

from pi.prompt.prompts.base import Prompt, PromptConfig
from pi.prompt.prompts.confirm import Confirm
from pi.prompt.prompts.custom_type import CustomType, CustomTypePrompt
from pi.prompt.prompts.date_select import DateSelect, DateSelectPrompt
from pi.prompt.prompts.editor import Editor, EditorPrompt, ExternalEditor
from pi.prompt.prompts.multi_select import MultiSelect, MultiSelectPrompt
from pi.prompt.prompts.password import Password, PasswordDisplayMode, PasswordPrompt
from pi.prompt.prompts.select import Select, SelectPrompt
from pi.prompt.prompts.text import Text, TextPrompt

__all__ = [
    "Confirm",
    "CustomType",
    "CustomTypePrompt",
    "DateSelect",
    "DateSelectPrompt",
    "Editor",
    "EditorPrompt",
    "ExternalEditor",
    "MultiSelect",
    "MultiSelectPrompt",
    "Password",
    "PasswordDisplayMode",
    "PasswordPrompt",
    "Prompt",
    "PromptConfig",
    "Select",
    "SelectPrompt",
    "Text",
    "TextPrompt",
]
