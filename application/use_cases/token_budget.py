# application/use_cases/token_budget.py
from typing import Iterable

from core.domain.models import ChatMessage
from core.ports.tokenizer_port import TokenizerPort

# Fixed overheads, not user-configurable
TOKENS_PER_MESSAGE = 4
TOKENS_PER_REQUEST = 2


class TokenBudgetEstimator:
    """Approximates the prompt size of a rendered message list"""

    def __init__(self, tokenizer: TokenizerPort):
        self.tokenizer = tokenizer

    def count(self, text: str) -> int:
        return self.tokenizer.count(text)

    def estimate(self, messages: Iterable[ChatMessage]) -> int:
        total = TOKENS_PER_REQUEST
        for message in messages:
            total += self.count(message.content) + TOKENS_PER_MESSAGE
        return total
