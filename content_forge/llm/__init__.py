from .client import GenerationClient, TextGenerator
from .prompts import build_instruction

__all__ = ["GenerationClient", "TextGenerator", "build_instruction"]
