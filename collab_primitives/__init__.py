"""Shared primitives for the collaboration client.

Sorted-merge helpers, the tie-break bias, typed message dispatch, fixture
text generation and HTTP error context live in the ``core`` and
``services`` subpackages; the most common names are re-exported here.
"""

from .core.http import context, http_context, with_context
from .core.ordering import Bias, BoundedSortedList, Counter, Ordering, compare, extend_sorted, post_inc
from .services.dispatch import Envelope, FunctionHandler, MessageHandler, MessageHub, MessageStream, handle_messages
from .services.fixtures import RandomCharIter, random_text, random_text_iterator

__all__ = [
    "Bias",
    "BoundedSortedList",
    "Counter",
    "Envelope",
    "FunctionHandler",
    "MessageHandler",
    "MessageHub",
    "MessageStream",
    "Ordering",
    "RandomCharIter",
    "compare",
    "context",
    "extend_sorted",
    "handle_messages",
    "http_context",
    "post_inc",
    "random_text",
    "random_text_iterator",
    "with_context",
]
