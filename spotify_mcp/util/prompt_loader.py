import logging
from pathlib import Path

from jinja2 import Template

from spotify_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class PromptLoader:
    @staticmethod
    def load_instructions(tool_registry: ToolRegistry, prompts_dir: Path = PROMPTS_DIR) -> str | None:
        """Render the server instructions advertised to MCP clients."""
        try:
            with open(prompts_dir / "instructions.txt") as f:
                template = Template(f.read(), trim_blocks=True, lstrip_blocks=True)
            return template.render(categories=tool_registry.categories()).strip()
        except OSError:
            logger.error(f"Failed to load server instructions from {prompts_dir}")
            return None
