import pytest

from pi.prompt.keybindings import PromptKeybindingsManager, set_prompt_keybindings
from pi.prompt.render_config import RenderConfig, set_render_config


@pytest.fixture(autouse=True)
def plain_rendering():
    """Render without colors and with default keybindings in every test."""
    set_render_config(RenderConfig.empty())
    set_prompt_keybindings(PromptKeybindingsManager())
    yield
    set_render_config(None)
    set_prompt_keybindings(PromptKeybindingsManager())
