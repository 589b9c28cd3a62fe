"""Conversation history trimming to keep requests within the model's input size."""

from typing import Callable, List, Sequence

from appscout.models.app_schema import ChatMessage
from config.settings import settings

# Character count stands in for tokens
MAX_CONTEXT_CHARS = settings.MAX_CONTEXT_CHARS


def message_length(message: ChatMessage) -> int:
    """Default cost of a message: its character count."""
    return len(message.content)


def fit_context_window(
    history: Sequence[ChatMessage],
    reserved_text: str,
    budget: int = MAX_CONTEXT_CHARS,
    cost: Callable[[ChatMessage], int] = message_length,
) -> List[ChatMessage]:
    """
    Select the longest suffix of history that fits the remaining budget.

    The budget left after reserved_text (system instruction + pending user
    message) is filled newest-first. The walk stops at the first message
    that does not fit, even if older messages would.

    Args:
        history: Prior turns, oldest first (not modified)
        reserved_text: Text that will accompany the history in the request
        budget: Total size allowance, in the units of cost
        cost: Size of a single message

    Returns:
        A new list holding the kept messages in their original order
    """
    remaining = budget - len(reserved_text)
    used = 0
    start = len(history)

    for index in range(len(history) - 1, -1, -1):
        size = cost(history[index])
        if used + size < remaining:
            used += size
            start = index
        else:
            break

    return list(history[start:])
