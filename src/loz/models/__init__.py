from .chat_turn import ChatTurn
from .params import Completion, CompletionParameters
from .provider import ProviderIdentity

__all__ = ["ChatTurn", "Completion", "CompletionParameters", "ProviderIdentity"]
