"""Answer generation."""

from noterag.generate.answerer import Answerer
from noterag.generate.factory import get_answerer, get_completer
from noterag.generate.openai import OpenAICompleter

__all__ = ["Answerer", "OpenAICompleter", "get_answerer", "get_completer"]
