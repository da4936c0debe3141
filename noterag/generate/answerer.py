"""Prompt composition and answer generation."""

import structlog

from noterag.errors import GenerationError, ProviderError
from noterag.generate.prompts import ANSWER_INSTRUCTIONS, build_answer_prompt
from noterag.protocols import Completer

logger = structlog.get_logger(__name__)


class Answerer:
    """Combines instructions, context and question into one completion call."""

    def __init__(
        self,
        completer: Completer,
        instructions: str = ANSWER_INSTRUCTIONS,
    ):
        """Initialize answerer.

        Args:
            completer: Completion provider
            instructions: Static instruction block placed before the context
        """
        self._completer = completer
        self._instructions = instructions

    @property
    def model_name(self) -> str:
        """Return the completion model name."""
        return self._completer.model_name

    def compose(self, context: str, question: str) -> str:
        """Build the prompt without sending it."""
        return build_answer_prompt(
            context=context,
            question=question,
            instructions=self._instructions,
        )

    async def compose_and_ask(self, context: str, question: str) -> str:
        """Compose the prompt and return the completion text unmodified.

        Args:
            context: Assembled context block, possibly empty
            question: User question

        Returns:
            Generated answer

        Raises:
            GenerationError: If the completion service fails
        """
        prompt = self.compose(context, question)
        logger.debug(
            "answer_prompt_composed",
            prompt_chars=len(prompt),
            context_chars=len(context),
        )
        return await self.ask(prompt)

    async def ask(self, prompt: str) -> str:
        """Send an already composed prompt.

        Raises:
            GenerationError: If the completion service fails
        """
        try:
            return await self._completer.complete(prompt)
        except GenerationError:
            raise
        except ProviderError as e:
            raise GenerationError(str(e)) from e
